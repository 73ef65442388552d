"""SQLAlchemy ORM models for Pomodore."""

from sqlalchemy import Column, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class SettingEntry(Base):
    """One persisted preference.  The table is a plain key-value store."""

    __tablename__ = "settings"

    key = Column(String(64), primary_key=True)
    value = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<SettingEntry {self.key}={self.value!r}>"
