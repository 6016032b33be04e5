from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from educonnect.auth.dependencies import get_token_email
from educonnect.auth.policy import AuthContext, admin_only, require
from educonnect.database import get_db, store_errors
from educonnect.models.course_class import STATUS_APPROVED, STATUS_PENDING, STATUS_REJECTED, CourseClass
from educonnect.store import Collection, InsertResult, UpdateResult

router = APIRouter(tags=['classes'])


class Publisher(BaseModel):
    email: str
    name: str | None = None


class CreateClassRequest(BaseModel):
    title: str
    price: float = Field(ge=0)
    description: str | None = None
    image: str | None = None
    publisher: Publisher
    # Accepted for client compatibility; new classes always start Pending.
    status: str | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Title is required.')
        return normalized


class UpdateClassRequest(BaseModel):
    title: str | None = None
    price: float | None = Field(default=None, ge=0)
    description: str | None = None
    image: str | None = None

    # Defaults are not validated, so these only fire for values the client sent.
    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str:
        if value is None or not value.strip():
            raise ValueError('Title is required.')
        return value.strip()

    @field_validator('price')
    @classmethod
    def validate_price(cls, value: float | None) -> float:
        if value is None:
            raise ValueError('Price is required.')
        return value


class AssignmentsRequest(BaseModel):
    assignments: Any


class ClassResponse(BaseModel):
    id: int
    title: str
    price: float
    description: str | None = None
    image: str | None = None
    publisher: Publisher
    status: str
    enroll: int
    assignments: Any = None
    created_at: datetime | None = None


class MessageResponse(BaseModel):
    message: str


class DeleteClassResponse(MessageResponse):
    deleted_count: int = Field(serialization_alias='deletedCount')


def serialize_class(course: CourseClass) -> ClassResponse:
    return ClassResponse(
        id=course.id,
        title=course.title,
        price=course.price,
        description=course.description,
        image=course.image,
        publisher=Publisher(email=course.publisher_email or '', name=course.publisher_name),
        status=course.status,
        enroll=course.enroll or 0,
        assignments=course.assignments,
        created_at=course.created_at,
    )


def _set_status(class_id: int, new_status: str, db: Session) -> UpdateResult:
    with store_errors(db):
        return Collection(db, CourseClass).update_one(class_id, {'status': new_status})


@router.post('/class', response_model=InsertResult)
def create_class(
    data: CreateClassRequest,
    _: str = Depends(get_token_email),
    db: Session = Depends(get_db),
):
    with store_errors(db):
        course = Collection(db, CourseClass).insert_one(
            title=data.title,
            price=data.price,
            description=data.description,
            image=data.image,
            publisher_email=data.publisher.email,
            publisher_name=data.publisher.name,
            status=STATUS_PENDING,
            enroll=0,
        )
    return InsertResult(inserted_id=course.id)


@router.get('/allClasses', response_model=list[ClassResponse])
def list_all_classes(db: Session = Depends(get_db)):
    with store_errors(db):
        courses = Collection(db, CourseClass).find_many()
    return [serialize_class(course) for course in courses]


@router.get('/my-classes/{email}', response_model=list[ClassResponse])
def list_classes_by_publisher(
    email: str,
    _: str = Depends(get_token_email),
    db: Session = Depends(get_db),
):
    with store_errors(db):
        courses = Collection(db, CourseClass).find_many(publisher_email=email)
    return [serialize_class(course) for course in courses]


@router.get('/myClasses', response_model=list[ClassResponse])
def list_my_classes(email: str = Depends(get_token_email), db: Session = Depends(get_db)):
    return list_classes_by_publisher(email=email, _=email, db=db)


@router.get('/class/{class_id}', response_model=ClassResponse)
def get_class(class_id: int, _: str = Depends(get_token_email), db: Session = Depends(get_db)):
    with store_errors(db):
        course = Collection(db, CourseClass).get(class_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Class not found')
    return serialize_class(course)


@router.put('/class/{class_id}', response_model=MessageResponse)
def update_class(
    class_id: int,
    data: UpdateClassRequest,
    _: str = Depends(get_token_email),
    db: Session = Depends(get_db),
):
    patch = data.model_dump(exclude_unset=True)
    with store_errors(db, detail='Failed to update class'):
        result = Collection(db, CourseClass).update_one(class_id, patch)
    if result.modified_count == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Class not found or no changes made')
    return MessageResponse(message='Class updated successfully')


@router.patch('/my-classes/{class_id}/assignments', response_model=UpdateResult)
def set_assignments(
    class_id: int,
    data: AssignmentsRequest,
    _: str = Depends(get_token_email),
    db: Session = Depends(get_db),
):
    with store_errors(db, detail='Failed to update assignments'):
        result = Collection(db, CourseClass).update_one(class_id, {'assignments': data.assignments})
    if result.matched_count == 0:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail='Failed to update assignments')
    return result


@router.patch('/allClasses/approve/{class_id}', response_model=UpdateResult, dependencies=[Depends(require(admin_only))])
def approve_class(class_id: int, db: Session = Depends(get_db)):
    return _set_status(class_id, STATUS_APPROVED, db)


@router.patch('/allClasses/rejected/{class_id}', response_model=UpdateResult, dependencies=[Depends(require(admin_only))])
def reject_class(class_id: int, db: Session = Depends(get_db)):
    return _set_status(class_id, STATUS_REJECTED, db)


@router.delete('/class/{class_id}', response_model=DeleteClassResponse)
def delete_class(class_id: int, email: str = Depends(get_token_email), db: Session = Depends(get_db)):
    classes = Collection(db, CourseClass)
    with store_errors(db, detail='Failed to delete class'):
        course = classes.get(class_id)
        if course is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Class not found')

        if course.publisher_email != email:
            decision = admin_only(AuthContext(claims={'sub': email}, db=db))
            if not decision.allowed:
                raise HTTPException(status_code=decision.status_code, detail='Only the publisher or an admin can delete this class')

        result = classes.delete_one(class_id)
    if result.deleted_count == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Class not found')
    return DeleteClassResponse(message='Class deleted successfully', deleted_count=result.deleted_count)
