# carnet/services/api/app.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carnet.common.settings import get_settings
from carnet.services.api.errors import register_error_handlers
from carnet.services.api.routers import health, persons
from carnet.services.graphql.schema import create_graphql_router


def create_app() -> FastAPI:
    cfg = get_settings()
    dev = cfg.app_env.lower() == "development"

    app = FastAPI(
        title="Carnet API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(persons.router)
    if cfg.features.graphql_enabled:
        app.include_router(create_graphql_router(), prefix=cfg.api.graphql_path)

    return app

app = create_app()
