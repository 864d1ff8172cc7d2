import json
import logging
import os
import sys
import threading

import pytest

os.environ.setdefault("BCRYPT_ROUNDS", "4")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tablematch.database import UserStore, get_user_store
from tablematch.errors import PersistenceError
from tablematch.models.user import UserStoreData
from tablematch.services import account_service


def _record(user_id: int, email: str) -> dict:
    return {
        "id": user_id,
        "firstName": "Test",
        "lastName": "User",
        "email": email,
        "phone": "",
        "password": "$2b$04$hash",
        "preferences": [],
        "dietaryRestrictions": [],
        "cuisineTypes": [],
        "priceRange": "",
        "minRating": 3.0,
        "hasPreferences": False,
        "createdAt": "2024-01-01T00:00:00+00:00",
    }


def test_load_creates_default_document_when_missing(tmp_path):
    path = tmp_path / "data" / "users.json"
    store = UserStore(path)

    data = store.load()

    assert data.users == []
    assert data.next_id == 1
    assert json.loads(path.read_text()) == {"users": [], "nextId": 1}


def test_load_unparseable_file_returns_default_and_leaves_file(tmp_path, caplog):
    path = tmp_path / "users.json"
    path.write_text("{not json")
    store = UserStore(path)

    with caplog.at_level(logging.ERROR, logger="tablematch.database"):
        data = store.load()

    assert data.users == []
    assert data.next_id == 1
    assert path.read_text() == "{not json"
    assert "Error reading user store" in caplog.text


def test_load_wrong_shape_returns_default(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps([1, 2, 3]))

    data = UserStore(path).load()

    assert data.users == []
    assert path.read_text() == "[1, 2, 3]"


def test_save_writes_exact_snapshot(tmp_path):
    path = tmp_path / "users.json"
    document = {"users": [_record(1, "a@x.com"), _record(2, "b@x.com")], "nextId": 3}
    store = UserStore(path)

    assert store.save(UserStoreData.model_validate(document)) is True

    assert json.loads(path.read_text()) == document
    assert [p.name for p in tmp_path.iterdir()] == ["users.json"]


def test_unknown_record_keys_survive_round_trip(tmp_path):
    path = tmp_path / "users.json"
    record = _record(1, "a@x.com")
    record["favoriteTable"] = "window"
    path.write_text(json.dumps({"users": [record], "nextId": 2}))
    store = UserStore(path)

    store.save(store.load())

    assert json.loads(path.read_text())["users"][0]["favoriteTable"] == "window"


def test_next_id_is_kept_ahead_of_existing_ids(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": [_record(7, "a@x.com")], "nextId": 2}))

    assert UserStore(path).load().next_id == 8


def test_save_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file")
    store = UserStore(blocker / "users.json")

    with caplog.at_level(logging.ERROR, logger="tablematch.database"):
        saved = store.save(UserStoreData())

    assert saved is False
    assert "Error writing user store" in caplog.text


def test_mutate_saves_on_success_and_discards_on_error(tmp_path):
    path = tmp_path / "users.json"
    store = UserStore(path)

    with store.mutate() as data:
        data.next_id = 5

    assert store.load().next_id == 5

    try:
        with store.mutate() as data:
            data.next_id = 9
            raise RuntimeError("abort")
    except RuntimeError:
        pass

    assert store.load().next_id == 5


def test_initialize_reports_whether_file_was_created(tmp_path):
    store = UserStore(tmp_path / "users.json")

    assert store.initialize() is True
    assert store.initialize() is False


def test_get_user_store_shares_handle_per_path(tmp_path):
    first = get_user_store(tmp_path / "users.json")
    second = get_user_store(str(tmp_path / "users.json"))

    assert first is second
    assert get_user_store(tmp_path / "other.json") is not first


def test_loosely_typed_records_from_older_files_load(tmp_path):
    path = tmp_path / "users.json"
    record = _record(1, "old@x.com")
    record.update({
        "phone": 5551234,
        "preferences": [1, 2],
        "cuisineTypes": "thai",
        "priceRange": None,
        "minRating": "4",
        "hasPreferences": None,
    })
    del record["createdAt"]
    path.write_text(json.dumps({"users": [record], "nextId": 2}))

    [user] = UserStore(path).load().users

    assert user.phone == "5551234"
    assert user.preferences == ["1", "2"]
    assert user.cuisine_types == []
    assert user.price_range == ""
    assert user.min_rating == 4.0
    assert user.has_preferences is False
    assert user.created_at


def test_signup_keeps_accounts_from_older_files(tmp_path):
    path = tmp_path / "users.json"
    record = _record(1, "old@x.com")
    record.update({"phone": 5551234, "preferences": [1, 2]})
    path.write_text(json.dumps({"users": [record], "nextId": 2}))
    store = UserStore(path)

    user_id = account_service.create_account(
        store, "Ana", "Lee", "ana@x.com", "", "pass1234", "pass1234"
    )

    users = json.loads(path.read_text())["users"]
    assert user_id == 2
    assert [u["email"] for u in users] == ["old@x.com", "ana@x.com"]
    assert [u["id"] for u in users] == [1, 2]


def test_mutate_refuses_to_overwrite_unreadable_file(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": [{"id": "not-a-number"}], "nextId": 2}))
    original = path.read_text()
    store = UserStore(path)

    with pytest.raises(PersistenceError):
        with store.mutate() as data:
            data.next_id = 10

    with pytest.raises(PersistenceError):
        account_service.create_account(
            store, "Ana", "Lee", "ana@x.com", "", "pass1234", "pass1234"
        )

    assert path.read_text() == original


def test_non_finite_rating_is_never_written(tmp_path):
    path = tmp_path / "users.json"
    record = _record(1, "a@x.com")
    store = UserStore(path)
    data = UserStoreData.model_validate({"users": [record], "nextId": 2})
    data.users[0].min_rating = float("nan")

    assert store.save(data) is False
    assert not path.exists()


def test_concurrent_signups_do_not_lose_updates(tmp_path):
    path = tmp_path / "users.json"
    count = 8
    errors = []

    def signup(index: int) -> None:
        try:
            account_service.create_account(
                get_user_store(path),
                "User",
                str(index),
                f"user{index}@x.com",
                "",
                "pass1234",
                "pass1234",
            )
        except Exception as e:  # surfaced through the assertion below
            errors.append(e)

    threads = [threading.Thread(target=signup, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    document = json.loads(path.read_text())
    assert sorted(u["id"] for u in document["users"]) == list(range(1, count + 1))
    assert len({u["email"] for u in document["users"]}) == count
    assert document["nextId"] == count + 1
