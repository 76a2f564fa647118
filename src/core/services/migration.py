"""Category data migrations, invoked via the MigrateFunction Lambda.

Trips created before categories existed classify locations with the fixed
``locationType`` enum. ``migrate_to_categories`` gives each such trip the
default category set and points every typed location at its category.
"""

import logging
from typing import Any

from core.db import Collection, DocumentStore
from core.models import now_ms

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[dict[str, Any]] = [
    {"name": "Attraction", "iconName": "Camera", "color": "#3B82F6", "sortOrder": 1, "type": "attraction"},
    {"name": "Restaurant", "iconName": "UtensilsCrossed", "color": "#F97316", "sortOrder": 2, "type": "restaurant"},
    {"name": "Accommodation", "iconName": "Hotel", "color": "#A855F7", "sortOrder": 3, "type": "accommodation"},
    {"name": "Shop", "iconName": "ShoppingBag", "color": "#10B981", "sortOrder": 4, "type": "shop"},
    {"name": "Snack", "iconName": "Coffee", "color": "#EC4899", "sortOrder": 5, "type": "snack"},
]


def _migrate_trip(store: DocumentStore, trip: dict[str, Any], dry_run: bool, results: dict[str, Any]) -> None:
    trip_id = trip["id"]
    if store.query(Collection.CATEGORIES, "tripId", trip_id):
        logger.info("Trip %s already has categories, skipping", trip_id)
        return

    now = now_ms()
    category_ids: dict[str, str] = {}
    for category in DEFAULT_CATEGORIES:
        if dry_run:
            logger.info("[DRY RUN] Would create category %s for trip %s", category["name"], trip_id)
            category_ids[category["type"]] = f"dry-run-{category['type']}"
            continue

        category_ids[category["type"]] = store.insert(
            Collection.CATEGORIES,
            {
                "tripId": trip_id,
                "name": category["name"],
                "iconName": category["iconName"],
                "color": category["color"],
                "sortOrder": category["sortOrder"],
                "isDefault": True,
                "createdBy": trip["ownerId"],
                "createdAt": now,
                "updatedAt": now,
            },
        )
        results["categoriesCreated"] += 1

    for location in store.query(Collection.LOCATIONS, "tripId", trip_id):
        location_type = location.get("locationType")
        if not location_type:
            continue

        category_id = category_ids.get(location_type)
        if category_id is None:
            message = f"No category mapping found for locationType: {location_type}"
            logger.error(message)
            results["errors"].append(message)
            continue

        if dry_run:
            logger.info("[DRY RUN] Would update location %s with categoryId %s", location["id"], category_id)
        else:
            store.patch(Collection.LOCATIONS, location["id"], {"categoryId": category_id, "updatedAt": now})
            results["locationsUpdated"] += 1


def migrate_to_categories(store: DocumentStore, dry_run: bool = False) -> dict[str, Any]:
    """Create default categories per trip and map legacy location types onto them.

    Errors on one trip are collected and the migration moves on to the next.
    """
    results: dict[str, Any] = {
        "tripsProcessed": 0,
        "categoriesCreated": 0,
        "locationsUpdated": 0,
        "errors": [],
    }

    for trip in store.scan(Collection.TRIPS):
        results["tripsProcessed"] += 1
        try:
            _migrate_trip(store, trip, dry_run, results)
        except Exception as e:
            message = f"Error processing trip {trip['id']}: {e}"
            logger.exception(message)
            results["errors"].append(message)

    logger.info("Category migration complete: %s", results)
    return {"status": "success", "dryRun": dry_run, **results}


def rollback_categories_migration(store: DocumentStore, confirm: bool) -> dict[str, Any]:
    """Delete every category and clear ``categoryId`` on every location. Destroys user-made categories too."""
    if not confirm:
        raise ValueError("Must set confirmRollback to true to proceed with rollback")

    categories = store.scan(Collection.CATEGORIES)
    for category in categories:
        store.delete(Collection.CATEGORIES, category["id"])

    now = now_ms()
    locations_updated = 0
    for location in store.scan(Collection.LOCATIONS):
        if location.get("categoryId"):
            store.patch(Collection.LOCATIONS, location["id"], {"categoryId": None, "updatedAt": now})
            locations_updated += 1

    logger.info("Rolled back categories: %d deleted, %d locations cleared", len(categories), locations_updated)
    return {"status": "success", "categoriesDeleted": len(categories), "locationsUpdated": locations_updated}
