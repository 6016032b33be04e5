from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from educonnect.auth.dependencies import get_token_email
from educonnect.auth.policy import admin_only, require
from educonnect.database import get_db, store_errors
from educonnect.models.teacher_request import (
    REQUEST_APPROVED,
    REQUEST_PENDING,
    REQUEST_REJECTED,
    TeacherRequest,
)
from educonnect.store import Collection, InsertResult, UpdateResult

router = APIRouter(tags=['teacher-requests'])


class TeacherRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    data: dict[str, Any]
    status: str
    created_at: datetime | None = None


class TeacherRoleResponse(BaseModel):
    teacher: bool


@router.post('/teacher-req', response_model=InsertResult)
def submit_request(
    data: dict[str, Any] = Body(...),
    email: str = Depends(get_token_email),
    db: Session = Depends(get_db),
):
    with store_errors(db):
        request = Collection(db, TeacherRequest).insert_one(email=email, data=data, status=REQUEST_PENDING)
    return InsertResult(inserted_id=request.id)


@router.get('/teacher-req', response_model=list[TeacherRequestResponse], dependencies=[Depends(require(admin_only))])
def list_requests(db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, TeacherRequest).find_many()


@router.get('/all-teacher', response_model=list[TeacherRequestResponse])
def list_public_requests(db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, TeacherRequest).find_many()


@router.get('/teacher-req/teacher/{email}', response_model=TeacherRoleResponse)
def check_teacher_role(email: str, _: str = Depends(get_token_email), db: Session = Depends(get_db)):
    with store_errors(db):
        approved = Collection(db, TeacherRequest).find_one(email=email, status=REQUEST_APPROVED)
    return TeacherRoleResponse(teacher=approved is not None)


@router.patch('/teacher-req/approve/{request_id}', response_model=UpdateResult, dependencies=[Depends(require(admin_only))])
def approve_request(request_id: int, db: Session = Depends(get_db)):
    # The applicant's role is changed separately through PATCH /users/teacher/{email}.
    with store_errors(db):
        return Collection(db, TeacherRequest).update_one(request_id, {'status': REQUEST_APPROVED}, status=REQUEST_PENDING)


@router.patch('/teacher-req/rejected/{request_id}', response_model=UpdateResult, dependencies=[Depends(require(admin_only))])
def reject_request(request_id: int, db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, TeacherRequest).update_one(request_id, {'status': REQUEST_REJECTED}, status=REQUEST_PENDING)
