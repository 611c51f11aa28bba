import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.models.user import User
from app.schemas.user import UserCreateRequest
from app.services.department_service import department_service
from app.services.user_service import UserService, user_service
from app.utils.exceptions import (
    DataAccessException, DepartmentNotFoundException, DuplicateEmailException,
)


def _request(**overrides) -> UserCreateRequest:
    data = {"name": "Juan Pérez", "email": "juan.perez@example.com", "departmentId": 1}
    data.update(overrides)
    return UserCreateRequest(**data)


def _user_count(db) -> int:
    return db.query(User).count()


# ─── Users by department ──────────────────────────────────────────────────────

def test_users_by_department_groups_and_counts(db, seeded_users):
    result = user_service.users_by_department(db)

    assert result == [
        {"departmentId": 1, "departmentName": "Ventas", "userCount": 3},
        {"departmentId": 2, "departmentName": "Recursos Humanos", "userCount": 3},
    ]


def test_users_by_department_orders_by_department_id(db, departments):
    # Users only in the higher id department first
    db.add(User(name="B", email="b@example.com", departmentId=2))
    db.add(User(name="A", email="a@example.com", departmentId=1))
    db.commit()

    result = user_service.users_by_department(db)

    assert [r["departmentId"] for r in result] == [1, 2]


def test_users_by_department_skips_empty_departments(db, departments):
    db.add(User(name="Solo", email="solo@example.com", departmentId=2))
    db.commit()

    result = user_service.users_by_department(db)

    assert result == [{"departmentId": 2, "departmentName": "Recursos Humanos", "userCount": 1}]


def test_users_by_department_empty_database(db):
    assert user_service.users_by_department(db) == []


def test_users_by_department_reflects_new_user(db, seeded_users):
    before = user_service.users_by_department(db)[0]["userCount"]

    user_service.create_user(db, _request())

    after = user_service.users_by_department(db)[0]["userCount"]
    assert after == before + 1


def test_users_by_department_wraps_storage_errors(db, monkeypatch):
    def broken_query(*args, **kwargs):
        raise SQLAlchemyError("Database error")

    monkeypatch.setattr(db, "query", broken_query)

    with pytest.raises(DataAccessException) as exc_info:
        user_service.users_by_department(db)

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Error retrieving users by department"


# ─── Exists by email ──────────────────────────────────────────────────────────

def test_exists_by_email(db, seeded_users):
    assert user_service.exists_by_email(db, "user1@example.com") is True
    assert user_service.exists_by_email(db, "noexiste@example.com") is False


# ─── Create ───────────────────────────────────────────────────────────────────

def test_create_user_persists_and_returns_user(db, departments):
    result = user_service.create_user(db, _request())

    assert result["id"] is not None
    assert result["name"] == "Juan Pérez"
    assert result["email"] == "juan.perez@example.com"
    assert result["departmentId"] == 1

    db.expire_all()
    saved = db.query(User).filter(User.id == result["id"]).one()
    assert saved.department.name == "Ventas"


def test_create_user_duplicate_email_inserts_nothing(db, seeded_users):
    before = _user_count(db)

    with pytest.raises(DuplicateEmailException) as exc_info:
        user_service.create_user(db, _request(email="user1@example.com"))

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Email already in use"
    assert _user_count(db) == before


def test_create_user_duplicate_email_skips_department_lookup(db, seeded_users, monkeypatch):
    calls = []
    monkeypatch.setattr(department_service, "get_department",
                        lambda db, department_id: calls.append(department_id))

    with pytest.raises(DuplicateEmailException):
        user_service.create_user(db, _request(email="user1@example.com"))

    assert calls == []


def test_create_user_unknown_department_inserts_nothing(db, departments):
    with pytest.raises(DepartmentNotFoundException) as exc_info:
        user_service.create_user(db, _request(departmentId=99))

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Department not found with ID: 99"
    assert _user_count(db) == 0


def test_create_user_wraps_storage_errors(db, departments, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT INTO users", {}, Exception("Database error"))

    monkeypatch.setattr(db, "commit", broken_commit)

    with pytest.raises(DataAccessException) as exc_info:
        user_service.create_user(db, _request())

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Error saving user"
    monkeypatch.undo()
    assert _user_count(db) == 0


def test_create_user_unique_constraint_is_final_guard(db, seeded_users, monkeypatch):
    # Simulate a concurrent writer: the pre-check misses, the unique index does not
    real_exists = UserService.exists_by_email
    calls = {"n": 0}

    def racing_exists(self, db, email):
        calls["n"] += 1
        if calls["n"] == 1:
            return False
        return real_exists(self, db, email)

    monkeypatch.setattr(UserService, "exists_by_email", racing_exists)
    before = _user_count(db)

    with pytest.raises(DuplicateEmailException):
        user_service.create_user(db, _request(email="user1@example.com"))

    assert _user_count(db) == before


def test_create_user_department_removed_after_lookup(db, departments, monkeypatch):
    # Lookup succeeds but the foreign key rejects the insert
    monkeypatch.setattr(department_service, "get_department",
                        lambda db, department_id: object())

    with pytest.raises(DepartmentNotFoundException):
        user_service.create_user(db, _request(departmentId=42))

    assert _user_count(db) == 0


# ─── Departments ──────────────────────────────────────────────────────────────

def test_department_lookups(db, departments):
    assert department_service.list_departments(db) == [
        {"id": 1, "name": "Ventas"},
        {"id": 2, "name": "Recursos Humanos"},
    ]
    assert department_service.get_department(db, 2).name == "Recursos Humanos"
    assert department_service.get_department(db, 99) is None
    assert department_service.get_by_name(db, "Ventas").id == 1
