from datetime import datetime
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from educonnect.database import get_db, store_errors
from educonnect.models.feedback import Feedback
from educonnect.store import Collection, InsertResult

router = APIRouter(tags=['feedback'])


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: dict[str, Any]
    created_at: datetime | None = None


@router.post('/feedback', response_model=InsertResult)
def submit_feedback(content: dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    with store_errors(db):
        feedback = Collection(db, Feedback).insert_one(content=content)
    return InsertResult(inserted_id=feedback.id)


@router.get('/feedback', response_model=list[FeedbackResponse])
def list_feedback(db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, Feedback).find_many()
