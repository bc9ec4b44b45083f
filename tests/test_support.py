from datetime import datetime, timedelta

import pytest

from stockdesk.backfill import run_backfill
from stockdesk.config import Settings
from stockdesk.database import build_engine, build_session_factory, init_db
from stockdesk.errors import AppError, NotFoundError
from stockdesk.models import Item, SaleLog, STOCK_OUT
from stockdesk.utils.time_utils import time_ago, to_utc_z

NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.mark.parametrize("delta,expected", [
    (timedelta(seconds=20), "just now"),
    (timedelta(minutes=1), "1 minute ago"),
    (timedelta(minutes=45), "45 minutes ago"),
    (timedelta(hours=5, minutes=59), "5 hours ago"),
    (timedelta(days=3, hours=2), "3 days ago"),
])
def test_time_ago(delta, expected):
    assert time_ago(NOW - delta, NOW) == expected


def test_to_utc_z():
    assert to_utc_z(datetime(2024, 5, 1, 12, 0, 0, 123456)) == "2024-05-01T12:00:00Z"
    assert to_utc_z(None) is None


def test_postgres_url_is_rewritten():
    settings = Settings(DATABASE_URL="postgres://u:p@db:5432/stock")
    assert settings.database_url == "postgresql://u:p@db:5432/stock"
    assert Settings(DATABASE_URL="sqlite:///./x.db").database_url == "sqlite:///./x.db"


def test_backfill_command(tmp_path):
    url = f"sqlite:///{tmp_path / 'backfill.db'}"
    engine = build_engine(url)
    init_db(engine)
    session = build_session_factory(engine)()
    item = Item(name="Lamp", price=20, amount=10)
    session.add(item)
    session.flush()
    session.add(SaleLog(item_id=item.id, action=STOCK_OUT, details="Sold 4 units - Order #3131"))
    session.commit()
    session.close()
    engine.dispose()

    assert run_backfill(Settings(DATABASE_URL=url)) == 1
    assert run_backfill(Settings(DATABASE_URL=url)) == 0


@pytest.mark.parametrize("error,expected", [
    (NotFoundError("Item not found"), 404),
    (NotFoundError("Item not found", status_code=410), 410),
    (AppError("boom"), 500),
])
def test_error_status_codes(error, expected):
    assert error.status_code == expected
    assert error.message == str(error)
