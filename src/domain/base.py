"""Shared base for persisted domain entities"""

from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# BIGINT primary keys only autoincrement through SQLite's INTEGER rowid alias
BigIntId = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    """Base class for all table entities"""

    pass
