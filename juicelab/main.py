# juicelab/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import JSONResponse

from juicelab.core.config import settings
from juicelab.core.database import init_db
from juicelab.core.errors import StoreError, ValidationFailed

from juicelab.api.auth import router as auth_router
from juicelab.api.users import router as users_router
from juicelab.api.bonuses import router as bonuses_router
from juicelab.api.orders import router as orders_router
from juicelab.api.loyalty import router as loyalty_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME}")
    init_db()
    logger.info("Database tables initialized")
    yield
    logger.info("Shutting down...")


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


# -------------------------
# Errors
# -------------------------
@app.exception_handler(StoreError)
@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: Exception):
    logger.error(f"Store error on {request.url.path}: {exc}")
    return JSONResponse({"detail": "Хранилище недоступно"}, status_code=503)


@app.exception_handler(ValidationFailed)
async def validation_error_handler(request: Request, exc: ValidationFailed):
    return JSONResponse({"detail": str(exc)}, status_code=400)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse({"detail": str(exc)}, status_code=422)


# -------------------------
# Routers
# -------------------------
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(bonuses_router)
app.include_router(orders_router)
app.include_router(loyalty_router)


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}
