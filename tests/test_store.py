import pytest

from food_delivery_api.app.core.errors import IdCounterCorrupted, InvalidPayload
from food_delivery_api.app.core.store import AppState
from food_delivery_api.app.schemas.item import ItemRead
from food_delivery_api.app.schemas.review import ReviewRead


def make_item(item_id, price=10, category="pizza"):
    return ItemRead(
        id=item_id,
        owner="alice",
        name="Margherita",
        description="Tomato and cheese",
        price=price,
        category=category,
    )


def test_ids_start_at_zero_and_are_shared(state):
    assert state.ids.current() == 0
    assert [state.ids.next_id() for _ in range(3)] == [0, 1, 2]
    assert state.ids.current() == 3


def test_current_does_not_advance(state):
    state.ids.current()
    state.ids.current()
    assert state.ids.next_id() == 0


def test_insert_get_remove(state):
    item = make_item(5)
    assert state.items.insert(5, item) is None
    assert state.items.get(5) == item
    assert state.items.remove(5) == item
    assert state.items.get(5) is None
    assert state.items.remove(5) is None


def test_insert_overwrites(state):
    state.items.insert(1, make_item(1, price=10))
    previous = state.items.insert(1, make_item(1, price=20))
    assert previous.price == 10
    assert state.items.get(1).price == 20
    assert state.items.count() == 1


def test_scan_is_ordered_by_id(state):
    for item_id in (7, 2, 11, 4):
        state.items.insert(item_id, make_item(item_id))
    assert [item_id for item_id, _ in state.items.scan()] == [2, 4, 7, 11]


def test_filter_scans_whole_store(state):
    state.reviews.insert(1, ReviewRead(id=1, client_id=0, item_id=3, rating=4))
    state.reviews.insert(2, ReviewRead(id=2, client_id=0, item_id=9, rating=2))
    state.reviews.insert(3, ReviewRead(id=3, client_id=0, item_id=3, rating=5))
    assert [r.id for r in state.reviews.filter(lambda r: r.item_id == 3)] == [1, 3]


def test_state_survives_reopen(db_path):
    state = AppState.open(db_path)
    item_id = state.ids.next_id()
    state.items.insert(item_id, make_item(item_id))
    state.close()

    reopened = AppState.open(db_path)
    try:
        assert reopened.items.get(item_id) == make_item(item_id)
        assert reopened.ids.next_id() == item_id + 1
    finally:
        reopened.close()


def test_transaction_rolls_back_every_write(state):
    with pytest.raises(RuntimeError):
        with state.transaction():
            item_id = state.ids.next_id()
            state.items.insert(item_id, make_item(item_id))
            raise RuntimeError("boom")
    assert state.ids.current() == 0
    assert state.items.count() == 0


def test_nested_transaction_commits_once(state):
    with state.transaction():
        with state.transaction():
            state.items.insert(1, make_item(1))
        assert state.db.in_transaction
    assert not state.db.in_transaction
    assert state.items.get(1) is not None


def test_oversize_record_is_rejected(state):
    big = make_item(1).model_copy(update={"description": "x" * 2000})
    with pytest.raises(InvalidPayload):
        state.items.insert(1, big)
    assert state.items.count() == 0


def test_corrupt_counter_value(state):
    state.db.execute("UPDATE id_counter SET value = 'garbage' WHERE id = 0")
    with pytest.raises(IdCounterCorrupted):
        state.ids.next_id()


def test_missing_counter_cell(state):
    state.db.execute("DELETE FROM id_counter")
    with pytest.raises(IdCounterCorrupted):
        state.ids.current()


def test_open_refuses_corrupt_counter(db_path):
    state = AppState.open(db_path)
    state.db.execute("UPDATE id_counter SET value = -4 WHERE id = 0")
    state.close()
    with pytest.raises(IdCounterCorrupted):
        AppState.open(db_path)


def test_keys_outside_sqlite_range(state):
    assert state.items.get(2**63) is None
    assert state.items.get(2**64 - 1) is None
    assert state.items.remove(2**64 - 1) is None
    with pytest.raises(InvalidPayload):
        state.items.insert(2**63, make_item(0))
    assert state.items.count() == 0
