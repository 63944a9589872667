"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from eventlink.domain.entities import ROLE_ADMIN, User
from eventlink.infrastructure.models import UserModel
from eventlink.utils import now_in_app_naive_datetime


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self, skip: int = 0, limit: int = 100, *, role: str | None = None
    ) -> Sequence[User]:
        query = self.session.query(UserModel).filter(UserModel.deleted_at.is_(None))
        if role:
            query = query.filter(UserModel.role == role)
        query = query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
        return [self._to_entity(model) for model in query.offset(skip).limit(limit).all()]

    def get(self, user_id: int, *, include_deleted: bool = False) -> User | None:
        model = self._get_model(include_deleted=include_deleted, id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str, *, include_deleted: bool = False) -> User | None:
        query = self.session.query(UserModel).filter(
            func.lower(UserModel.email) == email.strip().lower()
        )
        if not include_deleted:
            query = query.filter(UserModel.deleted_at.is_(None))
        model = query.first()
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        model.created_at = user.created_at or now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self._get_model(include_deleted=True, id=user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, user)
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def record_login(self, user_id: int) -> None:
        model = self._get_model(id=user_id)
        if model is None:
            return
        model.last_login_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()

    def soft_delete(self, user_id: int) -> None:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise LookupError(msg)
        model.deleted_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()

    def list_admin_ids(self, allowlist: Iterable[str] = ()) -> list[int]:
        """Return ids of admins by stored role or by allowlisted email."""

        emails = [email.lower() for email in allowlist]
        criteria = [UserModel.role == ROLE_ADMIN]
        if emails:
            criteria.append(func.lower(UserModel.email).in_(emails))
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.deleted_at.is_(None))
            .filter(or_(*criteria))
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def count_by_role(self) -> dict[str, int]:
        rows = (
            self.session.query(UserModel.role, func.count(UserModel.id))
            .filter(UserModel.deleted_at.is_(None))
            .group_by(UserModel.role)
            .all()
        )
        return {role: count for role, count in rows}

    def get_map_by_ids(
        self, user_ids: Sequence[int], *, include_deleted: bool = False
    ) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        if not include_deleted:
            query = query.filter(UserModel.deleted_at.is_(None))
        return {model.id: self._to_entity(model) for model in query.all()}

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password=model.password,
            role=model.role,
            first_name=model.first_name,
            last_name=model.last_name,
            email_verified=bool(model.email_verified),
            last_login_at=model.last_login_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )

    def _get_model(self, include_deleted: bool = False, **filters) -> UserModel | None:
        query = self.session.query(UserModel)
        if not include_deleted:
            query = query.filter(UserModel.deleted_at.is_(None))
        return query.filter_by(**filters).first()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.email = user.email
        model.password = user.password
        model.role = user.role
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.email_verified = user.email_verified
        model.last_login_at = user.last_login_at
        model.deleted_at = user.deleted_at


__all__ = ["UserRepository"]
