from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from budget_tracker.core.config import Settings
from budget_tracker.db.schema import init_db
from budget_tracker.db.storage import LocalStorage
from budget_tracker.main import create_app
from budget_tracker.models.entry import Entry


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "budget.sqlite3"
    init_db(path)
    return path


@pytest.fixture
def storage(db_path: Path) -> LocalStorage:
    return LocalStorage(db_path)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    s = Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "app.sqlite3",
        exchange_rate_provider="static",
        rates_refresh_enabled=False,
    )
    s.init_post_load()
    return s


@pytest.fixture
def app(settings: Settings):
    return create_app(settings_override=settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def make_entry(
    entry_id: int,
    type: str = "expense",
    amount: float = 10.0,
    currency: Optional[str] = None,
    date: str = "2024-01-05T10:00:00.000Z",
    label: str = "Item",
    category: Optional[str] = None,
) -> Entry:
    return Entry(
        id=entry_id,
        type=type,
        label=label,
        amount=amount,
        category=category or ("salary" if type == "income" else "food"),
        currency=currency,
        date=date,
    )
