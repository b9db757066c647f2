"""
SQLAlchemy implementation of the Base Repository.

Every query is filtered by the tenant id the repository was built with; the
tenant id is injected on create and can never be overwritten by a payload.
"""

from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from stockroom.domain.repositories.base import BaseRepository
from stockroom.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

PROTECTED_FIELDS = {"id", "user_id", "created_at", "updated_at"}


def _payload_dict(obj_in: Any) -> dict:
    if hasattr(obj_in, "model_dump"):
        return obj_in.model_dump(exclude_unset=True)
    return dict(obj_in)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic tenant-scoped repository implementation for SQLAlchemy models."""

    def __init__(
        self,
        db: Session,
        model: Type[ModelType],
        tenant_id: str,
        order_by: Optional[Sequence[Any]] = None,
    ):
        self.db = db
        self.model = model
        self.tenant_id = tenant_id
        self.order_by = list(order_by) if order_by is not None else [model.created_at.desc(), model.id.desc()]

    def scoped(self) -> Query:
        return self.db.query(self.model).filter(self.model.user_id == self.tenant_id)

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.scoped().filter(self.model.id == id).first()

    def list(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        query = self.scoped().order_by(*self.order_by).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def exists(self, id: int) -> bool:
        return self.db.query(self.scoped().filter(self.model.id == id).exists()).scalar()

    def count(self) -> int:
        return self.db.query(func.count(self.model.id)).filter(self.model.user_id == self.tenant_id).scalar() or 0

    def create(self, obj_in: Any) -> ModelType:
        obj_data = {k: v for k, v in _payload_dict(obj_in).items() if k not in PROTECTED_FIELDS}
        db_obj = self.model(**obj_data, user_id=self.tenant_id)
        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        update_data = _payload_dict(obj_in)

        for field, value in update_data.items():
            if field in PROTECTED_FIELDS:
                continue
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, db_obj: ModelType) -> None:
        self.db.delete(db_obj)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
