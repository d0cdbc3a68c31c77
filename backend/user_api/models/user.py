"""User ORM: the single persisted table, `users`.

Invariants:
    - id is an auto-incrementing integer primary key, assigned by the engine
    - name and email are NOT NULL text (VARCHAR(100))
    - No indexes beyond the primary key, no foreign keys

Design Decisions:
    - sqlite_autoincrement: SQLite never hands out a deleted max id again,
      matching MySQL AUTO_INCREMENT
    - CREATE TABLE IF NOT EXISTS built from the model, so the startup bootstrap
      and POST /create-table issue the same DDL
"""

from sqlalchemy import Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import CreateTable

from user_api.db.base import Base


class User(Base):
    """One user record."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)


users_table: Table = User.__table__


def create_users_table() -> CreateTable:
    """Idempotent DDL for the users table."""
    return CreateTable(users_table, if_not_exists=True)
