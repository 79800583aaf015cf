"""
env.py — Alembic Migration Environment for the storefront

The database URL always comes from storefront settings (DATABASE_URL), never
from alembic.ini. SQLite runs in batch mode so ALTERs become table copies.

Called by: alembic CLI
Depends on: storefront.models (Base + all tables), storefront.config (Settings)
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from storefront.config import Settings
from storefront.models import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

DATABASE_URL = Settings().database_url


def _configure(**kwargs) -> None:
    is_sqlite = DATABASE_URL.startswith("sqlite")
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=is_sqlite,
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_offline() -> None:
    """Emit SQL to stdout without a live connection."""
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})


def run_online() -> None:
    engine = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with engine.connect() as connection:
        _configure(connection=connection)


if context.is_offline_mode():
    run_offline()
else:
    run_online()
