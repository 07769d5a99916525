from __future__ import annotations

from alembic import context
from sqlalchemy import engine_from_config, pool

from taskquest.config import SETTINGS
from taskquest.infra import models  # noqa: F401
from taskquest.infra.db import Base

config = context.config
config.set_main_option("sqlalchemy.url", SETTINGS.database_url)
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=SETTINGS.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
