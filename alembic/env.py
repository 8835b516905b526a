from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

# Loads .env as a side effect
from config.app_config import DATABASE_URL
from database.models import Base

config = context.config

if config.config_file_name:
    fileConfig(config.config_file_name)

# Escape % characters for ConfigParser (% -> %%)
config.set_main_option("sqlalchemy.url", DATABASE_URL.replace("%", "%%"))

target_metadata = Base.metadata


def run_migrations_offline():
    """Emit SQL to stdout without a live connection."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    # Use DATABASE_URL directly to avoid ConfigParser interpolation
    connectable = create_engine(DATABASE_URL, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
