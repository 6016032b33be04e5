from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from educonnect.auth.dependencies import get_token_email
from educonnect.auth.policy import admin_only, require, self_only
from educonnect.database import get_db, store_errors
from educonnect.models.user import ROLE_ADMIN, ROLE_STUDENT, ROLE_TEACHER, User
from educonnect.store import Collection, DeleteResult, UpdateResult

router = APIRouter(tags=['users'])


class RegisterUserRequest(BaseModel):
    name: str | None = None
    photo: str | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None = None
    photo: str | None = None
    role: str
    created_at: datetime | None = None


class AdminFlagResponse(BaseModel):
    admin: bool


@router.post('/users/{email}', response_model=UserResponse)
def register_user(email: str, data: RegisterUserRequest, db: Session = Depends(get_db)):
    users = Collection(db, User)
    with store_errors(db):
        existing = users.find_one(email=email)
        if existing:
            return existing

        try:
            return users.insert_one(email=email, name=data.name, photo=data.photo, role=ROLE_STUDENT)
        except IntegrityError:
            # Lost a registration race for the same email.
            db.rollback()
            existing = users.find_one(email=email)
            if existing is None:
                raise
            return existing


@router.get('/users', response_model=list[UserResponse], dependencies=[Depends(require(admin_only))])
def list_users(db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, User).find_many()


@router.get('/user', response_model=UserResponse)
def get_self(email: str = Depends(get_token_email), db: Session = Depends(get_db)):
    with store_errors(db):
        user = Collection(db, User).find_one(email=email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='User not found')
    return user


@router.get('/users/search', response_model=list[UserResponse])
def search_users(query: str = Query(default=''), db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, User).find_many(
            or_(
                User.name.icontains(query, autoescape=True),
                User.email.icontains(query, autoescape=True),
            )
        )


@router.get(
    '/users/admin/{email}',
    response_model=AdminFlagResponse,
    dependencies=[Depends(require(self_only('email')))],
)
def get_admin_flag(email: str, db: Session = Depends(get_db)):
    with store_errors(db):
        user = Collection(db, User).find_one(email=email)
    return AdminFlagResponse(admin=user is not None and user.role == ROLE_ADMIN)


@router.patch('/users/admin/{user_id}', response_model=UpdateResult, dependencies=[Depends(require(admin_only))])
def promote_to_admin(user_id: int, db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, User).update_one(user_id, {'role': ROLE_ADMIN})


@router.patch('/users/teacher/{email}', response_model=UpdateResult, dependencies=[Depends(require(admin_only))])
def promote_to_teacher(email: str, db: Session = Depends(get_db)):
    users = Collection(db, User)
    with store_errors(db):
        user = users.find_one(email=email)
        if user is None:
            return UpdateResult(matched_count=0, modified_count=0)
        return users.update_one(user.id, {'role': ROLE_TEACHER})


@router.delete('/users/{user_id}', response_model=DeleteResult, dependencies=[Depends(require(admin_only))])
def delete_user(user_id: int, db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, User).delete_one(user_id)
