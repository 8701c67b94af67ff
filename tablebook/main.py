from __future__ import annotations

import logging

import yaml
from fastapi import FastAPI

from tablebook.infrastructure.config import Settings
from tablebook.infrastructure.database import DEFAULT_TABLES, Database
from tablebook.presentation.routers import router


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Composition root: builds and initializes the store handle, then wires the routers.

    Run with `uvicorn --factory tablebook.main:create_app`.
    """
    if settings is None:
        from tablebook.infrastructure.config import settings

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    if database is None:
        database = Database(settings.database_url, busy_timeout=settings.busy_timeout)
    database.initialize(
        reset=settings.reset_db_on_start,
        seed_tables=DEFAULT_TABLES if settings.seed_tables else (),
    )

    app = FastAPI(title="tablebook")
    app.state.settings = settings
    app.state.database = database

    # Use the contractual schema
    def custom_openapi():
        with open(settings.openapi_path) as f:
            return yaml.safe_load(f)

    app.openapi = custom_openapi
    app.include_router(router)
    return app
