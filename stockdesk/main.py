# stockdesk/main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockdesk import __version__
from stockdesk.config import Settings
from stockdesk.database import build_engine, build_session_factory, init_db
from stockdesk.errors import register_error_handlers

# Routers
from stockdesk.routes.auth import router as auth_router
from stockdesk.routes.users import router as users_router
from stockdesk.routes.items import router as items_router
from stockdesk.routes.catalog import router as catalog_router
from stockdesk.routes.customers import router as customers_router
from stockdesk.routes.orders import router as orders_router
from stockdesk.routes.analytics import router as analytics_router
from stockdesk.routes.dashboard import router as dashboard_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Stockdesk API", version=__version__)

    # Configuration and the session factory live on app.state and reach
    # handlers through dependencies (see database.get_db, tokenJWT.get_settings)
    engine = build_engine(settings.database_url)
    init_db(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # CORS Configuration
    origins = [
        "http://localhost:4200",
        "http://127.0.0.1:4200",
    ]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Router registration
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(items_router)
    app.include_router(catalog_router)
    app.include_router(customers_router)
    app.include_router(orders_router)
    app.include_router(analytics_router)
    app.include_router(dashboard_router)

    @app.get("/")
    def read_root():
        return {"message": "Stockdesk API is running"}

    logger.info("Stockdesk API ready (database: %s)", engine.url.render_as_string(hide_password=True))
    return app
