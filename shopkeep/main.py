# shopkeep/main.py

import logging
import subprocess
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shopkeep import models  # noqa: F401  registers all tables on Base.metadata
from shopkeep.core.config import get_settings
from shopkeep.core.exceptions import EntityError, ErrorKind
from shopkeep.core.logging_config import configure_logging
from shopkeep.database import get_session
from shopkeep.routes import categories, health, locations, products, sales, users
from shopkeep.services.user_service import UserService

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def run_migrations() -> None:
    logger.info("Running database migrations...")
    result = subprocess.run(['alembic', 'upgrade', 'head'], capture_output=True, text=True)
    if result.returncode != 0:
        raise RuntimeError(f"Migration failed: {result.stderr}")
    logger.info("Migrations completed successfully")


async def bootstrap_admin() -> None:
    settings = get_settings()
    if not settings.ADMIN_PASSWORD:
        logger.info("ADMIN_PASSWORD not set, skipping administrator bootstrap")
        return
    async with get_session() as db:
        if await UserService(db).ensure_admin(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD):
            logger.info(f"Bootstrap administrator '{settings.ADMIN_USERNAME}' created")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if get_settings().RUN_MIGRATIONS:
        run_migrations()
    await bootstrap_admin()
    yield


app = FastAPI(
    title="Shopkeep Inventory & Sales",
    lifespan=lifespan
)


@app.exception_handler(EntityError)
async def entity_error_handler(request: Request, exc: EntityError):
    return JSONResponse(status_code=ERROR_STATUS[exc.kind], content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": f"Request{ErrorKind.INVALID_ARGUMENT.suffix}",
            "message": "Request validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


app.include_router(health.router)  # Health check should be accessible without auth
app.include_router(users.router)
app.include_router(locations.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(sales.router)
