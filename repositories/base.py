"""
Base repository interface for data access layer.
Repositories keep SQLAlchemy queries out of the service layer.
"""

from typing import Generic, TypeVar, Optional, Type
from uuid import UUID
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.

    ``add`` and ``remove`` only flush so a service can group several writes
    into one transaction; ``create`` and ``update`` commit immediately.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """Get entity by primary key"""
        return self.db.get(self.model, entity_id)

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity within the current transaction"""
        self.db.add(entity)
        self.db.flush()
        return entity

    def remove(self, entity: ModelType) -> None:
        self.db.delete(entity)
        self.db.flush()

    def create(self, entity: ModelType) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Persist changes made to a loaded entity"""
        self.db.commit()
        self.db.refresh(entity)
        return entity
