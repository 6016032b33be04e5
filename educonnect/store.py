"""Document-style access to the SQLAlchemy models.

Each model is treated as a collection of documents addressed by ``id`` or by
field filters. Write helpers report results in the same shape the web client
receives (``insertedId``, ``matchedCount``, ``modifiedCount``,
``deletedCount``).
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import func, update
from sqlalchemy.orm import Session

from educonnect.database import Base

ModelT = TypeVar('ModelT', bound=Base)


class WriteResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    acknowledged: bool = True


class InsertResult(WriteResult):
    inserted_id: int


class UpdateResult(WriteResult):
    matched_count: int
    modified_count: int


class DeleteResult(WriteResult):
    deleted_count: int


class Collection(Generic[ModelT]):
    def __init__(self, db: Session, model: type[ModelT]):
        self._db = db
        self._model = model

    def get(self, document_id: int) -> ModelT | None:
        return self._db.get(self._model, document_id)

    def find_one(self, *criteria: Any, **filters: Any) -> ModelT | None:
        return self._query(*criteria, **filters).first()

    def find_many(self, *criteria: Any, **filters: Any) -> list[ModelT]:
        return self._query(*criteria, **filters).order_by(self._model.id.asc()).all()

    def insert_one(self, **fields: Any) -> ModelT:
        document = self._model(**fields)
        self._db.add(document)
        self._db.commit()
        self._db.refresh(document)
        return document

    def update_one(self, document_id: int, patch: dict[str, Any], **expected: Any) -> UpdateResult:
        """Set the given fields; ``modified_count`` is 0 when nothing changed.

        ``expected`` field values narrow the match: a document whose current
        values differ counts as unmatched and is left alone.
        """
        document = self.get(document_id)
        if document is None or any(getattr(document, field) != value for field, value in expected.items()):
            return UpdateResult(matched_count=0, modified_count=0)

        changed = False
        for field, value in patch.items():
            if getattr(document, field) != value:
                setattr(document, field, value)
                changed = True

        if changed:
            self._db.commit()
        return UpdateResult(matched_count=1, modified_count=int(changed))

    def increment(self, document_id: int, field: str, amount: int = 1) -> UpdateResult:
        """Add ``amount`` to a numeric field in a single UPDATE statement."""
        column = getattr(self._model, field)
        result = self._db.execute(
            update(self._model)
            .where(self._model.id == document_id)
            .values({field: func.coalesce(column, 0) + amount})
            .execution_options(synchronize_session=False)
        )
        self._db.commit()
        return UpdateResult(matched_count=result.rowcount, modified_count=result.rowcount)

    def delete_one(self, document_id: int) -> DeleteResult:
        document = self.get(document_id)
        if document is None:
            return DeleteResult(deleted_count=0)

        self._db.delete(document)
        self._db.commit()
        return DeleteResult(deleted_count=1)

    def _query(self, *criteria: Any, **filters: Any):
        query = self._db.query(self._model)
        if criteria:
            query = query.filter(*criteria)
        if filters:
            query = query.filter_by(**filters)
        return query
