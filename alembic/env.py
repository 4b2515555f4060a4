from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from extraction_hub.core.config import settings
from extraction_hub.core.database import Base
from extraction_hub.models.user import User
from extraction_hub.models.profile import Profile
from extraction_hub.models.user_role import UserRole
from extraction_hub.models.permission import Permission, RolePermission
from extraction_hub.models.credential import Credential
from extraction_hub.models.job import Job
from extraction_hub.models.job_execution import JobExecution

config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

DATABASE_URL = settings.database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Emits SQL to the script output instead of executing it.
    """
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        {"sqlalchemy.url": DATABASE_URL},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
