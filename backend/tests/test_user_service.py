import logging

import pytest
from sqlalchemy.exc import OperationalError

from dtos.user_dto import UserDTO
from exceptions import UserNotFoundError
from repositories.user_repository import UserRepository
from services.user_service import UserService


@pytest.fixture
def service(db_session):
    return UserService(db_session, UserRepository(db_session))


def test_create_then_get_returns_equal_dto(service):
    created = service.create_user(UserDTO(name="Ada", email="ada@x.com"))

    result = service.get_user_by_id(created.id)

    assert result.is_ok
    assert result.value == created


def test_create_ignores_id_in_dto(service):
    created = service.create_user(UserDTO(id=99, name="Ada", email="ada@x.com"))

    assert created.id == 1
    assert service.get_user_by_id(99).is_err


def test_create_accepts_any_strings(service):
    created = service.create_user(UserDTO(name="", email="not-an-email"))

    assert created.name == ""
    assert created.email == "not-an-email"


def test_get_missing_user_is_not_found(service):
    result = service.get_user_by_id(7)

    assert result.is_err
    assert isinstance(result.error, UserNotFoundError)
    assert result.error.user_id == 7
    with pytest.raises(UserNotFoundError):
        result.unwrap()


def test_delete_then_get_is_not_found(service):
    created = service.create_user(UserDTO(name="Ada", email="ada@x.com"))

    service.delete_user(created.id)

    assert service.get_user_by_id(created.id).is_err


def test_delete_unknown_id_does_not_fail(service):
    service.delete_user(404)


def test_update_forces_path_id(service):
    created = service.create_user(UserDTO(name="Ada", email="ada@x.com"))

    updated = service.update_user(created.id, UserDTO(id=500, name="Ada L", email="ada@x.com"))

    assert updated == UserDTO(id=created.id, name="Ada L", email="ada@x.com")
    assert service.get_user_by_id(500).is_err
    assert len(service.get_all_users()) == 1


def test_update_unknown_id_creates_user(service, caplog):
    with caplog.at_level(logging.WARNING, logger="services.user_service"):
        updated = service.update_user(10, UserDTO(name="Grace", email="grace@x.com"))

    assert updated.id == 10
    assert service.get_user_by_id(10).value == updated
    assert "created a new user" in caplog.text


def test_get_all_tracks_creates_minus_deletes(service):
    assert service.get_all_users() == []

    ids = [service.create_user(UserDTO(name=f"u{i}", email=f"u{i}@x.com")).id for i in range(4)]
    service.delete_user(ids[1])
    service.delete_user(ids[1])
    service.delete_user(999)

    users = service.get_all_users()
    assert len(users) == 3
    assert [u.id for u in users] == [ids[0], ids[2], ids[3]]


def test_scenario(service):
    assert service.create_user(UserDTO(name="Ada", email="ada@x.com")) == UserDTO(
        id=1, name="Ada", email="ada@x.com"
    )
    assert service.update_user(1, UserDTO(name="Ada L", email="ada@x.com")) == UserDTO(
        id=1, name="Ada L", email="ada@x.com"
    )
    assert service.get_user_by_id(2).is_err
    service.delete_user(1)
    assert service.get_user_by_id(1).is_err


def test_store_failure_rolls_back_and_propagates(db_session, monkeypatch):
    repo = UserRepository(db_session)
    service = UserService(db_session, repo)

    def broken_save(obj):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(repo, "save", broken_save)
    rollbacks = []
    monkeypatch.setattr(db_session, "rollback", lambda: rollbacks.append(True))

    with pytest.raises(OperationalError):
        service.create_user(UserDTO(name="Ada", email="ada@x.com"))
    assert rollbacks == [True]
