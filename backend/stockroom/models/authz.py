from __future__ import annotations
from sqlalchemy.orm import declarative_base, Mapped, mapped_column
from sqlalchemy import String, Integer, Enum

from stockroom.constants.roles import Role

Base = declarative_base()


class User(Base):
    __tablename__ = 'users'
    # AUTOINCREMENT keeps ids monotonic even after the highest row is deleted
    __table_args__ = {'sqlite_autoincrement': True}
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    # case-folded email, the uniqueness key
    email_key: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role, name='role'), nullable=False, default=Role.UNKNOWN)

    def set_email(self, raw: str):
        self.email = raw
        self.email_key = raw.casefold()
