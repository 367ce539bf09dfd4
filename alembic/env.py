"""Alembic environment configuration."""

import os
from logging.config import fileConfig

from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool

from alembic import context

from company_review.config import settings
from company_review.db.base import Base

# Import all models to ensure they are registered
from company_review.models import company, company_document  # noqa

load_dotenv()

# Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata
target_metadata = Base.metadata


def get_sync_database_url() -> str:
    """
    Migrations run synchronously through psycopg2.

    MIGRATION_DATABASE_URL wins when set (e.g. running migrations from the
    host against a containerised database).
    """
    database_url = os.getenv("MIGRATION_DATABASE_URL") or str(settings.DATABASE_URL)

    if database_url.startswith("postgresql+asyncpg://"):
        database_url = database_url.replace("postgresql+asyncpg://", "postgresql://")
        # asyncpg uses 'ssl=false/true/require', psycopg2 uses 'sslmode=disable/require'
        for old, new in (
            ("ssl=false", "sslmode=disable"),
            ("ssl=true", "sslmode=require"),
            ("ssl=require", "sslmode=require"),
        ):
            database_url = database_url.replace(f"?{old}", f"?{new}").replace(f"&{old}", f"&{new}")

    return database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=get_sync_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    config.set_main_option("sqlalchemy.url", get_sync_database_url())

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
