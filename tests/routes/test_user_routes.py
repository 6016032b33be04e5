import pytest
from fastapi import HTTPException

from educonnect.models.user import User
from educonnect.routes.user_routes import (
    RegisterUserRequest,
    delete_user,
    get_admin_flag,
    get_self,
    list_users,
    promote_to_admin,
    promote_to_teacher,
    register_user,
    search_users,
)


def test_register_user_defaults_role_to_student(db) -> None:
    created = register_user(email='new@example.com', data=RegisterUserRequest(name='New User'), db=db)

    assert created.role == 'Student'
    assert created.name == 'New User'
    assert created.created_at is not None


def test_register_user_twice_returns_existing_record(db) -> None:
    first = register_user(email='twice@example.com', data=RegisterUserRequest(name='First'), db=db)
    second = register_user(email='twice@example.com', data=RegisterUserRequest(name='Second'), db=db)

    assert second.id == first.id
    assert second.name == 'First'
    assert db.query(User).filter(User.email == 'twice@example.com').count() == 1


def test_list_users_returns_everyone(db, make_user) -> None:
    make_user('a@example.com')
    make_user('b@example.com')

    users = list_users(db=db)

    assert [u.email for u in users] == ['a@example.com', 'b@example.com']


def test_get_self_returns_caller_record(db, make_user) -> None:
    make_user('me@example.com', name='Me')

    assert get_self(email='me@example.com', db=db).name == 'Me'


def test_get_self_returns_not_found_for_deleted_user(db) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_self(email='gone@example.com', db=db)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'User not found'


def test_get_admin_flag_reports_role(db, make_user) -> None:
    make_user('admin@example.com', role='admin')
    make_user('student@example.com')

    assert get_admin_flag(email='admin@example.com', db=db).admin is True
    assert get_admin_flag(email='student@example.com', db=db).admin is False
    assert get_admin_flag(email='nobody@example.com', db=db).admin is False


def test_search_users_matches_name_or_email_case_insensitively(db, make_user) -> None:
    make_user('bob@example.com', name='Robert')
    make_user('alice@example.com', name='BOBBY Tables')
    make_user('carol@example.com', name='Carol')
    make_user('BOBCAT@example.com', name=None)

    matches = search_users(query='bob', db=db)

    assert {u.email for u in matches} == {'bob@example.com', 'alice@example.com', 'BOBCAT@example.com'}


def test_search_users_treats_wildcards_literally(db, make_user) -> None:
    make_user('percent@example.com', name='100% sure')
    make_user('plain@example.com', name='plain')

    matches = search_users(query='%', db=db)

    assert [u.email for u in matches] == ['percent@example.com']


def test_promote_to_admin_sets_role(db, make_user) -> None:
    target = make_user('promote@example.com')

    result = promote_to_admin(user_id=target.id, db=db)

    assert result.matched_count == 1
    assert result.modified_count == 1
    db.refresh(target)
    assert target.role == 'admin'


def test_promote_to_admin_reports_zero_for_unknown_user(db) -> None:
    result = promote_to_admin(user_id=999, db=db)

    assert result.matched_count == 0
    assert result.modified_count == 0
    assert result.model_dump(by_alias=True) == {'acknowledged': True, 'matchedCount': 0, 'modifiedCount': 0}


def test_promote_to_teacher_sets_role_by_email(db, make_user) -> None:
    target = make_user('teach@example.com')

    result = promote_to_teacher(email='teach@example.com', db=db)

    assert result.modified_count == 1
    db.refresh(target)
    assert target.role == 'teacher'


def test_promote_to_teacher_reports_zero_for_unknown_email(db) -> None:
    assert promote_to_teacher(email='ghost@example.com', db=db).matched_count == 0


def test_delete_user_removes_record(db, make_user) -> None:
    target = make_user('bye@example.com')

    assert delete_user(user_id=target.id, db=db).deleted_count == 1
    assert delete_user(user_id=target.id, db=db).deleted_count == 0
