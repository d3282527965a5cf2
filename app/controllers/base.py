# app/controllers/base.py

from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy.orm.query import Query

from app.core.database import Base

# Define TypeVar to link the SQLAlchemy model type to the Pydantic schemas
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseController(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    A generic base class for all database controllers.
    It provides basic create, read, update, and delete functionality.
    Controllers only flush, committing is left to the calling service.
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initializes the controller with a specific SQLAlchemy model.
        """
        self._model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """
        Retrieves a single record by its primary key.
        """
        if id is None:
            return None
        return db.get(self._model, id)

    def create(
        self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]], **extra
    ) -> ModelType:
        """
        Creates a new record.
        """
        obj_in_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(mode="json")
        db_obj = self._model(**obj_in_data, **extra)
        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """
        Updates an existing record with the fields that were actually sent.
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(mode="json", exclude_unset=True)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db.add(db_obj)
        db.flush()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, db_obj: ModelType) -> ModelType:
        """
        Removes a record from the database.
        """
        db.delete(db_obj)
        db.flush()
        return db_obj

    def get_cursor_query(self, db: Session, base_query: Query | None = None):
        """Entities without created_at have to override this method"""
        if not getattr(self._model, "created_at", None):
            raise NotImplementedError(
                f"{self._model.__name__} has no created_at, override get_cursor_query"
            )

        query = base_query or db.query(self._model)
        return query.order_by(self._model.created_at.desc(), self._model.id.desc())
