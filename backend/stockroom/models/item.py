from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, CheckConstraint

from .authz import Base


class Item(Base):
    __tablename__ = 'items'
    __table_args__ = (
        CheckConstraint('num >= 0', name='ck_items_num_non_negative'),
        {'sqlite_autoincrement': True},
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    name_key: Mapped[str] = mapped_column(String(128), unique=True, index=True, nullable=False)
    num: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def set_name(self, raw: str):
        self.name = raw
        self.name_key = raw.casefold()
