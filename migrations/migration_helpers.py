from __future__ import annotations

from alembic import op
from sqlalchemy import inspect
from sqlalchemy.engine import Connection


# --- Dialect helpers ---------------------------------------------------------

def get_connection() -> Connection:
    bind = op.get_bind()
    assert bind is not None, "Alembic op has no bind connection"
    return bind


# --- Existence checks --------------------------------------------------------

def table_exists(table_name: str) -> bool:
    inspector = inspect(get_connection())
    return table_name in inspector.get_table_names()


def index_exists(table_name: str, index_name: str) -> bool:
    if not table_exists(table_name):
        return False
    inspector = inspect(get_connection())
    return any(index.get('name') == index_name for index in inspector.get_indexes(table_name))
