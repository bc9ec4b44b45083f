# stockdesk/backfill.py
"""
Fills the structured quantity/order_number columns of old stock_out logs
from their free-text details.

Usage: stockdesk-backfill   (reads DATABASE_URL like the API does)
"""
import logging

from stockdesk.config import Settings
from stockdesk.database import build_engine, build_session_factory, init_db
from stockdesk.utils.log_parser import backfill_sale_fields


def run_backfill(settings: Settings) -> int:
    engine = build_engine(settings.database_url)
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        return backfill_sale_fields(session)
    finally:
        session.close()
        engine.dispose()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    updated = run_backfill(Settings())
    print(f"Updated {updated} sale log rows.")


if __name__ == "__main__":
    main()
