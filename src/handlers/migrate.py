"""Operator-invoked data migrations. Not exposed through API Gateway.

Event shapes:
    {"action": "migrate", "dryRun": true}
    {"action": "rollback", "confirmRollback": true}
"""

import logging
from typing import Any

from core.clients import get_document_store
from core.services.migration import migrate_to_categories, rollback_categories_migration

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    action = event.get("action", "migrate")
    store = get_document_store()

    if action == "migrate":
        return migrate_to_categories(store, dry_run=bool(event.get("dryRun", False)))
    if action == "rollback":
        return rollback_categories_migration(store, confirm=bool(event.get("confirmRollback", False)))

    logger.error("Unknown migration action: %s", action)
    raise ValueError(f"Unknown action: {action}")
