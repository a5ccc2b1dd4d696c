"""
Base classes for the domain services.

Routers stay thin and call a service; services own validation, pricing and
commits; repositories own queries.

    class ProductService(BaseCRUDService[Product, ProductOutput]):
        def __init__(self, db: Session):
            super().__init__(db, Product, ProductOutput, "Product")

Subclasses customise behaviour through the hook methods instead of
overriding create/update.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rest_api.models import Base
from rest_api.services.crud.repository import BaseRepository
from rest_api.services.crud.soft_delete import soft_delete
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import DatabaseError, NotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(Generic[ModelT]):
    """Holds the session and a repository for the service's main model."""

    def __init__(self, db: Session, model: type[ModelT], repo: BaseRepository[ModelT] | None = None):
        self._db = db
        self._model = model
        self._repo = repo or BaseRepository(model, db)

    @property
    def repo(self) -> BaseRepository[ModelT]:
        return self._repo


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Create / read / partial update / logical delete over one model.

    Reads only see active rows, so a deleted entity answers 404 everywhere.
    """

    def __init__(
        self,
        db: Session,
        model: type[ModelT],
        output_schema: type[OutputT],
        entity_name: str,
        *,
        repo: BaseRepository[ModelT] | None = None,
    ):
        super().__init__(db, model, repo)
        self._output_schema = output_schema
        self._entity_name = entity_name

    def get_entity(self, entity_id: str, *, options: list[Any] | None = None) -> ModelT:
        """Active row or NotFoundError."""
        entity = self._repo.find_by_id(entity_id, options=options)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get_by_id(self, entity_id: str) -> OutputT:
        return self.to_output(self.get_entity(entity_id))

    def list_all(self, *conditions: Any, order_by: Any | None = None) -> list[OutputT]:
        return [
            self.to_output(e) for e in self._repo.find_all(*conditions, order_by=order_by)
        ]

    def create(self, data: dict[str, Any]) -> OutputT:
        self._validate_create(data)
        entity = self._model(**self._prepare_data(data))
        self._db.add(entity)
        self._commit(entity, "create")
        self._after_create(entity)
        return self.to_output(entity)

    def update(self, entity_id: str, data: dict[str, Any]) -> OutputT:
        """Apply only the provided fields to an active entity."""
        entity = self.get_entity(entity_id)
        self._validate_update(entity, data)

        for field_name, value in self._prepare_data(data).items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)
        entity.touch()

        self._commit(entity, "update")
        return self.to_output(entity)

    def delete(self, entity_id: str) -> OutputT:
        """Mark an active entity deleted. A second delete is a 404."""
        entity = self.get_entity(entity_id)
        try:
            soft_delete(self._db, entity)
        except SQLAlchemyError as e:
            logger.error("Soft delete failed", entity=self._entity_name, entity_id=entity_id, error=str(e))
            raise DatabaseError(f"delete {self._entity_name.lower()}")
        return self.to_output(entity)

    def to_output(self, entity: ModelT) -> OutputT:
        return self._output_schema.model_validate(entity)

    def _commit(self, entity: ModelT, action: str) -> None:
        """Commit and refresh; database failures become DatabaseError."""
        try:
            safe_commit(self._db)
            self._db.refresh(entity)
        except SQLAlchemyError as e:
            logger.error("Commit failed", action=action, entity=self._entity_name, error=str(e))
            raise DatabaseError(f"{action} {self._entity_name.lower()}")

    # Hooks

    def _validate_create(self, data: dict[str, Any]) -> None:
        """Raise ValidationError / ConflictError to reject a create."""

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        """Raise ValidationError / ConflictError to reject an update."""

    def _prepare_data(self, data: dict[str, Any]) -> dict[str, Any]:
        """Map API fields to column values (price -> price_cents, ...)."""
        return data

    def _after_create(self, entity: ModelT) -> None:
        pass
