# --- Imports ---
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session # For database session management

# Internal imports from sibling modules
from .bootstrap import bootstrap
from .config import Settings
from .database import Database, get_db
from .inventory import list_stock, render_stock

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Endpoints ---
@router.get("/", response_class=PlainTextResponse)
def root():
    """Static welcome message."""
    return "Welcome to the Juice Inventory\n"


@router.get("/health")
def health(request: Request):
    """Liveness check used by deployments and the smoke test."""
    try:
        request.app.state.database.ping()
    except SQLAlchemyError:
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}


@router.get("/products")
def list_products(db: Session = Depends(get_db)):
    """Returns up to 200 stock units as an indented JSON array."""
    units = list_stock(db)
    return Response(content=render_stock(units), media_type="application/json")


@router.delete("/products/{item_id}", response_class=PlainTextResponse)
def delete_product(item_id: str):
    """
    Acknowledges a delete request.
    - Storage is left untouched; nothing is removed.
    """
    logger.info("Successfully deleted %s", item_id)
    return f"Successfully deleted {item_id}\n"


# --- Error handlers ---
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Inventory store error"})


async def row_error_handler(request: Request, exc: ValidationError):
    logger.error("Invalid stock row on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Invalid stock row in inventory store"})


def configure_logging(level):
    """Attach a root handler at the given level unless one is already configured."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# --- App Instance ---
def create_app(settings=None, database=None):
    """
    Build the FastAPI app.

    The store is bootstrapped in the lifespan startup phase, so the server
    only accepts requests once the schema and seed data are in place.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or Settings.from_env()
        configure_logging(cfg.log_level)
        db = database or Database(cfg.database_url, pool_pre_ping=True)
        try:
            bootstrap(db, cfg)

            app.state.settings = cfg
            app.state.database = db
            yield
        finally:
            # Only dispose engines we created ourselves, also when startup fails.
            if database is None:
                db.dispose()

    app = FastAPI(title="Juice Inventory", lifespan=lifespan)
    app.include_router(router)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(ValidationError, row_error_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    return app


app = create_app()


def run():
    """Console entry point: configure logging and serve on HOST:PORT."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Starting server...")
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
