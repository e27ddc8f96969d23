"""Unit tests for auth/store.py and auth/accounts.py -- user persistence.

Covers:
- create/get by id and email, opaque string ids
- UNIQUE(email) enforced by the schema, not only by the handler lookup
- list_users() is newest first
- update_user() whitelist, partial updates, missing id
- delete_user() is False on a second call
- create_account() hashes, defaults to customer, reports conflicts
"""

import pytest
from sqlalchemy.exc import IntegrityError

from auth.accounts import create_account
from auth.models import User
from auth.store import UserStore
from core.errors import ConflictError


def _user(email: str, **overrides) -> User:
    fields = dict(
        name="Carl",
        email=email,
        hashed_password="$2b$04$placeholderplaceholderplaceholderplaceholde",
        gender="Male",
        date_of_birth="1980-03-03",
        mobile_number="777",
        address="Z",
    )
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def store():
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


class TestUserStore:
    def test_create_and_fetch(self, store):
        uid = store.create_user(_user("carl@x.com"))
        assert isinstance(uid, str) and len(uid) == 32

        by_id = store.get_by_id(uid)
        by_email = store.get_by_email("carl@x.com")
        assert by_id == by_email
        assert by_id.role == "customer"
        assert by_id.created_at

    def test_missing_lookups_return_none(self, store):
        assert store.get_by_id("0" * 32) is None
        assert store.get_by_email("ghost@x.com") is None

    def test_duplicate_email_rejected_by_schema(self, store):
        store.create_user(_user("dup@x.com"))
        with pytest.raises(IntegrityError):
            store.create_user(_user("dup@x.com", name="Other"))
        assert store.count_users() == 1

    def test_email_uniqueness_is_case_sensitive(self, store):
        store.create_user(_user("case@x.com"))
        store.create_user(_user("CASE@x.com"))
        assert store.count_users() == 2

    def test_list_newest_first(self, store):
        first = store.create_user(_user("one@x.com"))
        second = store.create_user(_user("two@x.com"))
        ids = [u.id for u in store.list_users()]
        assert ids == [second, first]

    def test_update_fields(self, store):
        uid = store.create_user(_user("upd@x.com"))
        assert store.update_user(uid, name="Carla", role="employee")
        user = store.get_by_id(uid)
        assert user.name == "Carla"
        assert user.role == "employee"
        assert user.email == "upd@x.com"

    def test_update_rejects_password_field(self, store):
        uid = store.create_user(_user("pw@x.com"))
        with pytest.raises(ValueError):
            store.update_user(uid, hashed_password="x")

    def test_update_missing_user(self, store):
        assert store.update_user("f" * 32, name="Nobody") is False
        assert store.update_user("f" * 32) is False

    def test_update_email_collision(self, store):
        store.create_user(_user("taken@x.com"))
        uid = store.create_user(_user("free@x.com"))
        with pytest.raises(IntegrityError):
            store.update_user(uid, email="taken@x.com")

    def test_delete_twice(self, store):
        uid = store.create_user(_user("del@x.com"))
        assert store.delete_user(uid) is True
        assert store.delete_user(uid) is False
        assert store.get_by_id(uid) is None

    def test_ping(self, store):
        assert store.ping() is True


class TestCreateAccount:
    def test_hashes_and_defaults_to_customer(self, store):
        uid = create_account(
            store,
            name="Dana",
            email="dana@x.com",
            password="plain-secret",
            gender="Female",
            date_of_birth="1999-09-09",
            mobile_number="999",
            address="W",
            rounds=4,
        )
        user = store.get_by_id(uid)
        assert user.role == "customer"
        assert user.hashed_password != "plain-secret"
        assert user.hashed_password.startswith("$2")

    def test_conflict_on_existing_email(self, store):
        kwargs = dict(
            name="Eve",
            email="eve@x.com",
            password="pw",
            gender="Female",
            date_of_birth="2000-01-01",
            mobile_number="1",
            address="V",
            rounds=4,
        )
        create_account(store, **kwargs)
        with pytest.raises(ConflictError):
            create_account(store, **kwargs)
        assert store.count_users() == 1

    def test_rejects_unknown_role(self, store):
        with pytest.raises(ValueError):
            create_account(
                store,
                name="Fay",
                email="fay@x.com",
                password="pw",
                gender="Female",
                date_of_birth="2000-01-01",
                mobile_number="1",
                address="V",
                role="superuser",
                rounds=4,
            )
