"""
Repositories: the only place services build SELECT statements.

Rows with is_active = False are logically deleted and are hidden unless the
caller passes include_inactive=True.

    products = BaseRepository(Product, db).find_all(Product.id.in_(ids))
    user = UserRepository(db).find_by_email("ana@example.com")
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from rest_api.models import Base, MenuItem, User

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Common lookups over one model."""

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    def _select(self, conditions: tuple, include_inactive: bool) -> Select:
        query = select(self._model)
        if conditions:
            query = query.where(*conditions)
        if not include_inactive:
            query = query.where(self._model.is_active.is_(True))
        return query

    def find_by_id(
        self,
        entity_id: str,
        *,
        options: list[Any] | None = None,
        include_inactive: bool = False,
    ) -> ModelT | None:
        """
        Look up one row by primary key.

        Args:
            entity_id: The primary key value.
            options: Loader options such as selectinload(Order.items).
            include_inactive: Also return logically deleted rows.
        """
        query = self._select((self._model.id == entity_id,), include_inactive)
        if options:
            query = query.options(*options)
        return self._session.scalar(query)

    def find_first(self, *conditions: Any, include_inactive: bool = False) -> ModelT | None:
        return self._session.scalars(
            self._select(conditions, include_inactive).limit(1)
        ).first()

    def find_all(
        self,
        *conditions: Any,
        options: list[Any] | None = None,
        include_inactive: bool = False,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """All rows matching ``conditions``, optionally ordered and paged."""
        query = self._select(conditions, include_inactive)
        if options:
            query = query.options(*options)
        if order_by is not None:
            query = query.order_by(order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return self._session.scalars(query).all()

    def count(self, *, include_inactive: bool = False) -> int:
        query = select(func.count()).select_from(self._model)
        if not include_inactive:
            query = query.where(self._model.is_active.is_(True))
        return self._session.scalar(query) or 0

    def exists(self, *conditions: Any) -> bool:
        """True if any row, deleted or not, matches."""
        return bool(self._session.scalar(select(exists().where(*conditions))))


class UserRepository(BaseRepository[User]):
    def __init__(self, session: Session):
        super().__init__(User, session)

    def find_by_email(self, email: str, *, include_inactive: bool = False) -> User | None:
        return self.find_first(User.email == email, include_inactive=include_inactive)

    def email_taken(self, email: str) -> bool:
        """Emails stay reserved after a user is deleted."""
        return self.exists(User.email == email)


class MenuItemRepository(BaseRepository[MenuItem]):
    def __init__(self, session: Session):
        super().__init__(MenuItem, session)

    def path_taken(self, path: str, *, exclude_id: str | None = None) -> bool:
        """Paths stay reserved after a menu item is deleted."""
        conditions = [MenuItem.path == path]
        if exclude_id is not None:
            conditions.append(MenuItem.id != exclude_id)
        return self.exists(*conditions)
