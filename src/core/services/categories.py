"""Per-trip location categories (icon + color tags)."""

from core.db import Collection, DocumentStore
from core.errors import InvalidArgumentError, NotFoundError
from core.models import Category, CategoryCreate, CategoryReorder, CategoryUpdate, now_ms
from core.services.access import require_auth, require_editor_access, require_trip_access


def _load_category(store: DocumentStore, category_id: str) -> Category:
    row = store.get(Collection.CATEGORIES, category_id)
    if row is None:
        raise NotFoundError("Category not found")
    return Category.model_validate(row)


def _require_trip(store: DocumentStore, trip_id: str) -> None:
    if store.get(Collection.TRIPS, trip_id) is None:
        raise NotFoundError("Trip not found")


def _ensure_unique_name(store: DocumentStore, trip_id: str, name: str) -> None:
    for row in store.query(Collection.CATEGORIES, "tripId", trip_id):
        if row["name"] == name:
            raise InvalidArgumentError("A category with this name already exists")


def list_categories(store: DocumentStore, user_id: str | None, trip_id: str) -> list[Category]:
    user_id = require_auth(user_id)
    _require_trip(store, trip_id)
    require_trip_access(store, trip_id, user_id)

    rows = store.query(Collection.CATEGORIES, "tripId", trip_id)
    return sorted((Category.model_validate(row) for row in rows), key=lambda c: c.sort_order)


def get_category(store: DocumentStore, user_id: str | None, category_id: str) -> Category:
    user_id = require_auth(user_id)
    category = _load_category(store, category_id)
    require_trip_access(store, category.trip_id, user_id)
    return category


def create_category(store: DocumentStore, user_id: str | None, trip_id: str, payload: CategoryCreate) -> str:
    user_id = require_auth(user_id)
    _require_trip(store, trip_id)
    require_editor_access(store, trip_id, user_id)
    _ensure_unique_name(store, trip_id, payload.name)

    sort_order = payload.sort_order
    if sort_order is None:
        existing = store.query(Collection.CATEGORIES, "tripId", trip_id)
        sort_order = max((row["sortOrder"] for row in existing), default=0) + 1

    now = now_ms()
    return store.insert(
        Collection.CATEGORIES,
        {
            "tripId": trip_id,
            "name": payload.name,
            "iconName": payload.icon_name,
            "color": payload.color,
            "sortOrder": sort_order,
            "isDefault": False,
            "createdBy": user_id,
            "createdAt": now,
            "updatedAt": now,
        },
    )


def update_category(store: DocumentStore, user_id: str | None, category_id: str, payload: CategoryUpdate) -> str:
    user_id = require_auth(user_id)
    category = _load_category(store, category_id)
    require_editor_access(store, category.trip_id, user_id)

    if payload.name is not None and payload.name != category.name:
        _ensure_unique_name(store, category.trip_id, payload.name)

    changes = {key: value for key, value in payload.changes().items() if value is not None}
    store.patch(Collection.CATEGORIES, category_id, {**changes, "updatedAt": now_ms()})
    return category_id


def remove_category(store: DocumentStore, user_id: str | None, category_id: str) -> bool:
    """Delete a category nothing references. In-use categories are refused rather than left dangling."""
    user_id = require_auth(user_id)
    category = _load_category(store, category_id)
    require_editor_access(store, category.trip_id, user_id)

    in_use = [
        row
        for row in store.query(Collection.LOCATIONS, "tripId", category.trip_id)
        if row.get("categoryId") == category_id
    ]
    if in_use:
        raise InvalidArgumentError(f"Cannot delete category: {len(in_use)} location(s) are using it")

    store.delete(Collection.CATEGORIES, category_id)
    return True


def reorder_categories(store: DocumentStore, user_id: str | None, trip_id: str, payload: CategoryReorder) -> bool:
    user_id = require_auth(user_id)
    require_editor_access(store, trip_id, user_id)
    now = now_ms()

    for position, category_id in enumerate(payload.category_ids, start=1):
        row = store.get(Collection.CATEGORIES, category_id)
        if row is None or row["tripId"] != trip_id:
            raise InvalidArgumentError(f"Category {category_id} does not belong to this trip")
        store.patch(Collection.CATEGORIES, category_id, {"sortOrder": position, "updatedAt": now})

    return True
