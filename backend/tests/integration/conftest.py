from pathlib import Path

import pytest
from alembic import command, config


def _alembic_config_for_backend():
    backend_root = Path(__file__).resolve().parents[2]
    alembic_ini = backend_root / "alembic.ini"
    cfg = config.Config(str(alembic_ini))
    # Ensure Alembic uses the repository's migrations folder by absolute path
    migrations_path = backend_root / "migrations"
    cfg.set_main_option("script_location", str(migrations_path))
    return cfg


def _run_alembic_upgrade(sync_url: str):
    cfg = _alembic_config_for_backend()
    cfg.set_main_option("sqlalchemy.url", sync_url)
    command.upgrade(cfg, "head")


@pytest.fixture()
def migrated_url(tmp_path):
    """Apply Alembic migrations to a scratch SQLite database and return its URL."""
    sync_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    _run_alembic_upgrade(sync_url)
    return sync_url
