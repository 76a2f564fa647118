import pytest

from core.db import Collection
from core.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from core.models import CategoryCreate, CategoryReorder, CategoryUpdate, LocationCreate
from core.services import categories, locations


@pytest.fixture
def trip_id(make_trip):
    return make_trip()


def _create(store, trip_id, name="Food", user="owner-1", **fields):
    return categories.create_category(
        store, user, trip_id, CategoryCreate(name=name, icon_name="Utensils", color="#F97316", **fields)
    )


def test_create_category_appends(store, trip_id):
    first = _create(store, trip_id, "Food")
    second = _create(store, trip_id, "Museums")

    row = store.get(Collection.CATEGORIES, second)
    assert store.get(Collection.CATEGORIES, first)["sortOrder"] == 1
    assert row["sortOrder"] == 2
    assert row["isDefault"] is False
    assert row["createdBy"] == "owner-1"


def test_create_category_explicit_sort_order(store, trip_id):
    category_id = _create(store, trip_id, sort_order=10)

    assert store.get(Collection.CATEGORIES, category_id)["sortOrder"] == 10


def test_create_category_duplicate_name(store, trip_id):
    _create(store, trip_id, "Food")

    with pytest.raises(InvalidArgumentError, match="already exists"):
        _create(store, trip_id, "Food")


def test_create_category_same_name_other_trip(store, trip_id, make_trip):
    _create(store, trip_id, "Food")
    _create(store, make_trip(name="Other"), "Food")


def test_create_category_missing_trip(store):
    with pytest.raises(NotFoundError, match="Trip not found"):
        _create(store, "missing")


def test_create_category_refuses_non_member(store, trip_id):
    with pytest.raises(ForbiddenError):
        _create(store, trip_id, user="stranger")


def test_list_categories_sorted(store, trip_id):
    food = _create(store, trip_id, "Food", sort_order=2)
    bars = _create(store, trip_id, "Bars", sort_order=1)

    assert [c.id for c in categories.list_categories(store, "owner-1", trip_id)] == [bars, food]


def test_get_category(store, trip_id):
    category_id = _create(store, trip_id)

    assert categories.get_category(store, "owner-1", category_id).name == "Food"
    with pytest.raises(NotFoundError):
        categories.get_category(store, "owner-1", "missing")
    with pytest.raises(ForbiddenError):
        categories.get_category(store, "stranger", category_id)


def test_update_category(store, trip_id):
    category_id = _create(store, trip_id)

    categories.update_category(store, "owner-1", category_id, CategoryUpdate(name="Eats", color="#000000"))

    row = store.get(Collection.CATEGORIES, category_id)
    assert row["name"] == "Eats"
    assert row["color"] == "#000000"
    assert row["iconName"] == "Utensils"


def test_update_category_name_collision(store, trip_id):
    _create(store, trip_id, "Food")
    bars = _create(store, trip_id, "Bars")

    with pytest.raises(InvalidArgumentError, match="already exists"):
        categories.update_category(store, "owner-1", bars, CategoryUpdate(name="Food"))

    # Keeping its own name is not a collision
    categories.update_category(store, "owner-1", bars, CategoryUpdate(name="Bars", color="#111111"))


def test_remove_unused_category(store, trip_id):
    category_id = _create(store, trip_id)

    assert categories.remove_category(store, "owner-1", category_id) is True
    assert store.get(Collection.CATEGORIES, category_id) is None


def test_remove_category_in_use_is_refused(store, trip_id):
    category_id = _create(store, trip_id)
    locations.create_location(
        store, "owner-1", trip_id, LocationCreate(name="Ramen", latitude=1, longitude=1, category_id=category_id)
    )

    with pytest.raises(InvalidArgumentError, match="1 location\\(s\\) are using it"):
        categories.remove_category(store, "owner-1", category_id)

    assert store.get(Collection.CATEGORIES, category_id) is not None


def test_reorder_categories(store, trip_id):
    food = _create(store, trip_id, "Food")
    bars = _create(store, trip_id, "Bars")

    categories.reorder_categories(store, "owner-1", trip_id, CategoryReorder(category_ids=[bars, food]))

    assert [c.id for c in categories.list_categories(store, "owner-1", trip_id)] == [bars, food]


def test_reorder_categories_rejects_foreign(store, trip_id, make_trip):
    foreign = _create(store, make_trip(name="Other"), "Food")

    with pytest.raises(InvalidArgumentError, match="does not belong to this trip"):
        categories.reorder_categories(store, "owner-1", trip_id, CategoryReorder(category_ids=[foreign]))
