import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

# Import models so Base.metadata is fully populated for autogenerate
from perfboard.models.employee import Employee  # noqa: F401
from perfboard.models.evaluation import Evaluation  # noqa: F401
from perfboard.models.evaluation_score import EvaluationScore  # noqa: F401

from logging.config import fileConfig

from sqlalchemy import pool

from alembic import context

from perfboard.core.config import settings
from perfboard.db.base import Base
from perfboard.db.session import build_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# the URL always comes from Settings (env or .env), never from alembic.ini
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=settings.DATABASE_URL.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # same driver timeout as the app, but no pooling for a one-shot run
    connectable = build_engine(settings.DATABASE_URL, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
