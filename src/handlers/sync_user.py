"""Called by the web client after sign-in: mirrors the Clerk account and claims pending invites."""

import asyncio
from typing import Any

from core.api import caller_id, dispatch
from core.auth import get_auth_provider
from core.clients import get_document_store
from core.services import users
from core.services.access import require_auth


def _sync(event: dict[str, Any]) -> tuple[int, Any]:
    user_id = require_auth(caller_id(event))
    auth_user = asyncio.run(get_auth_provider().get_user(user_id))
    claimed = users.sync_user(get_document_store(), auth_user)
    return 200, {"userId": user_id, "invitesAccepted": claimed}


ROUTES = {
    "POST /me/sync": _sync,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, ROUTES)
