"""Record stores for identities and inventory items.

Each store owns an engine, a session factory and a re-entrant lock. Every
operation runs under the lock inside a single session transaction, so a
uniqueness scan (or the admin-count scan) and the write that follows it
cannot interleave with another request touching the same store. Ids come
from SQLite AUTOINCREMENT and are never reused.
"""
from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, select, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stockroom.constants.limits import MAX_INT64
from stockroom.constants.roles import Role
from stockroom.errors import Conflict, NotFound
from stockroom.models.authz import User
from stockroom.models.item import Item
from stockroom.services.passwords import hash_password

logger = logging.getLogger(__name__)


def make_engine(db_url: str) -> Engine:
    if db_url.endswith(':memory:'):
        # One shared connection, otherwise each pooled connection sees its own empty database
        return create_engine(
            db_url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(db_url, echo=False, future=True)


class RecordStore:
    model = None
    label = 'Record'

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
        self._lock = threading.RLock()
        self.model.__table__.create(engine, checkfirst=True)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        try:
            with self._lock, self._session_factory() as session, session.begin():
                yield session
        except IntegrityError as e:
            # unique key backstop; the explicit scans normally catch this first
            logger.info('Integrity error in %s store: %s', self.label, e.orig)
            raise Conflict(f'{self.label} conflicts with an existing record.') from e

    def _load(self, session: Session, record_id: int):
        if not 0 <= record_id <= MAX_INT64:
            raise NotFound(f'{self.label} not found.')
        row = session.get(self.model, record_id)
        if row is None:
            raise NotFound(f'{self.label} not found.')
        return row

    def get(self, record_id: int):
        with self.transaction() as session:
            return self._load(session, record_id)

    def delete(self, record_id: int) -> None:
        with self.transaction() as session:
            session.delete(self._load(session, record_id))

    def count(self) -> int:
        with self.transaction() as session:
            return session.scalar(select(func.count()).select_from(self.model))


class UserStore(RecordStore):
    model = User
    label = 'User'

    def _assert_email_free(self, session: Session, email: str, exclude_id: Optional[int] = None):
        stmt = select(User.id).where(User.email_key == email.casefold())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if session.scalar(stmt) is not None:
            logger.info('Rejected duplicate email for user %s', exclude_id if exclude_id is not None else '<new>')
            raise Conflict('Email already in use by another user.')

    @staticmethod
    def _admin_count(session: Session) -> int:
        return session.scalar(select(func.count()).select_from(User).where(User.role == Role.ADMIN))

    def create(self, *, first_name: str, last_name: str, email: str, password: str, role: Role,
               user_id: Optional[int] = None) -> User:
        # hash outside the lock; it is the slow part
        password_hash = hash_password(password)
        with self.transaction() as session:
            self._assert_email_free(session, email)
            user = User(first_name=first_name, last_name=last_name, password_hash=password_hash, role=role)
            user.set_email(email)
            if user_id is not None:
                user.id = user_id
            session.add(user)
            session.flush()
            return user

    def find_by_email(self, email: str) -> Optional[User]:
        with self.transaction() as session:
            return session.execute(select(User).where(User.email_key == email.casefold())).scalar_one_or_none()

    def list(self, first_name: Optional[str] = None, last_name: Optional[str] = None) -> List[User]:
        with self.transaction() as session:
            rows = session.execute(select(User).order_by(User.id.asc())).scalars().all()
        if first_name is not None:
            wanted = first_name.casefold()
            rows = [u for u in rows if u.first_name.casefold() == wanted]
        if last_name is not None:
            wanted = last_name.casefold()
            rows = [u for u in rows if u.last_name.casefold() == wanted]
        return list(rows)

    def update(self, user_id: int, *, first_name: str, last_name: str, email: str, password: str,
               role: Role) -> User:
        password_hash = hash_password(password)
        with self.transaction() as session:
            user = self._load(session, user_id)
            self._assert_email_free(session, email, exclude_id=user_id)
            if user.role == Role.ADMIN and role != Role.ADMIN and self._admin_count(session) <= 1:
                logger.info('Refused to demote last admin user %s', user_id)
                raise Conflict('Cannot remove the last admin user.')
            user.first_name = first_name
            user.last_name = last_name
            user.set_email(email)
            user.password_hash = password_hash
            user.role = role
            return user


class ItemStore(RecordStore):
    model = Item
    label = 'Item'

    def _assert_name_free(self, session: Session, name: str, exclude_id: Optional[int] = None):
        stmt = select(Item.id).where(Item.name_key == name.casefold())
        if exclude_id is not None:
            stmt = stmt.where(Item.id != exclude_id)
        if session.scalar(stmt) is not None:
            logger.info('Rejected duplicate item name %r', name)
            raise Conflict('Item with the same name already exists.')

    def create(self, *, name: str, num: int) -> Item:
        with self.transaction() as session:
            self._assert_name_free(session, name)
            item = Item(num=num)
            item.set_name(name)
            session.add(item)
            session.flush()
            return item

    def list(self, name: Optional[str] = None) -> List[Item]:
        """All items, or the single case-insensitive name match. ``ALL`` means no filter."""
        with self.transaction() as session:
            stmt = select(Item).order_by(Item.id.asc())
            if name is not None and name.casefold() != 'all':
                stmt = stmt.where(Item.name_key == name.casefold())
            return list(session.execute(stmt).scalars().all())

    def update(self, item_id: int, *, name: str, num: int) -> Item:
        with self.transaction() as session:
            item = self._load(session, item_id)
            self._assert_name_free(session, name, exclude_id=item_id)
            item.set_name(name)
            item.num = num
            return item


__all__ = ['make_engine', 'RecordStore', 'UserStore', 'ItemStore']
