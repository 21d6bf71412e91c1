from __future__ import annotations

from dotenv import load_dotenv
from fastapi import FastAPI

from form_schema_engine import __version__
from form_schema_engine.api.http_logging import install_http_logging
from form_schema_engine.api.routes.forms import router as forms_router
from form_schema_engine.api.routes.health import router as health_router


def create_app() -> FastAPI:
    # .env.local loads after .env and overrides it.
    load_dotenv()
    load_dotenv(".env.local", override=True)

    app = FastAPI(title="form-schema-engine", version=__version__)
    # Unversioned health for deployments and uptime checks.
    app.include_router(health_router)
    app.include_router(forms_router, prefix="/v1")
    install_http_logging(app)
    return app
