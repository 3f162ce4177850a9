"""SQLModel implementation of the user lookup used to scope requests."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.user import User


class SQLModelUserRepository:
    """Minimal user store; credentials are handled outside this package."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self.session_factory() as session:
            obj = session.get(User, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_or_create(self, username: str) -> User:
        """Return the user with ``username``, creating it on first use."""
        with self.session_factory() as session:
            user = session.exec(select(User).where(User.username == username)).first()
            if user is None:
                user = User(username=username)
                session.add(user)
                session.commit()
                session.refresh(user)
            session.expunge(user)
            return user


__all__ = ["SQLModelUserRepository"]
