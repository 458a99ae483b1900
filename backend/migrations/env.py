import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from echowrite.db.base import Base
from echowrite.models import *  # noqa: F401,F403

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata
COMPARE = {"target_metadata": target_metadata, "compare_type": True, "render_as_batch": True}


def database_url() -> str:
    """An explicit `sqlalchemy.url` (tests, -x overrides) wins over DATABASE_URL_SYNC."""
    url = config.get_main_option("sqlalchemy.url") or os.getenv("DATABASE_URL_SYNC")
    if not url:
        raise RuntimeError("Set DATABASE_URL_SYNC (a sync driver URL) before running migrations")
    return url


def run_offline() -> None:
    context.configure(url=database_url(), literal_binds=True, **COMPARE)
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    options = dict(config.get_section(config.config_ini_section) or {})
    options["sqlalchemy.url"] = database_url()
    engine = engine_from_config(options, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, **COMPARE)
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
