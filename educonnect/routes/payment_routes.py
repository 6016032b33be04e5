import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from educonnect.auth.dependencies import get_token_email
from educonnect.database import get_db, store_errors
from educonnect.models.course_class import CourseClass
from educonnect.models.payment import Payment
from educonnect.services import payments
from educonnect.store import Collection, InsertResult

router = APIRouter(tags=['payments'])

logger = logging.getLogger(__name__)


class PaymentIntentRequest(BaseModel):
    price: float = Field(gt=0)


class PaymentIntentResponse(BaseModel):
    client_secret: str = Field(serialization_alias='clientSecret')


class RecordPaymentRequest(BaseModel):
    email: str
    amount: float = Field(ge=0)
    class_id: int | None = None
    transaction_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    amount: float
    class_id: int | None = None
    transaction_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict, validation_alias='details')
    created_at: datetime | None = None


@router.post('/create-payment-intent/{class_id}', response_model=PaymentIntentResponse)
def create_payment_intent(class_id: int, data: PaymentIntentRequest, db: Session = Depends(get_db)):
    classes = Collection(db, CourseClass)
    with store_errors(db):
        course = classes.get(class_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Class not found')

    amount = payments.to_minor_units(data.price)
    try:
        client_secret = payments.create_payment_intent(amount, metadata={'class_id': str(class_id)})
    except payments.PaymentProviderError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to create payment intent',
        ) from exc

    with store_errors(db, detail='Failed to update enrollment'):
        result = classes.increment(class_id, 'enroll')
    if result.modified_count == 0:
        # The intent already exists at this point; there is no compensation.
        logger.error('Payment intent created but enrollment not updated for class %s', class_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail='Failed to update enrollment',
        )

    return PaymentIntentResponse(client_secret=client_secret)


@router.post('/payments', response_model=InsertResult)
def record_payment(data: RecordPaymentRequest, db: Session = Depends(get_db)):
    with store_errors(db):
        payment = Collection(db, Payment).insert_one(
            email=data.email,
            amount=data.amount,
            class_id=data.class_id,
            transaction_id=data.transaction_id,
            details=data.metadata,
        )
    return InsertResult(inserted_id=payment.id)


@router.get('/my-enrolled-class/{email}', response_model=list[PaymentResponse])
def list_my_enrollments(email: str, _: str = Depends(get_token_email), db: Session = Depends(get_db)):
    with store_errors(db):
        return Collection(db, Payment).find_many(email=email)
