import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.config import get_settings
from app.database import mongo
from app.errors import AppError
from app.models.response import Outcome, respond
from app.repositories.account_repository import MongoAccountStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing or malformed configuration raises here and aborts startup.
    settings = get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())

    database = await mongo.connect(settings)
    try:
        await MongoAccountStore(database, settings.APP_MONGO_QUERY_TIMEOUT_MS).ensure_indexes()
        yield
    finally:
        mongo.close()


app = FastAPI(title="Account Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return respond(Outcome.BAD_REQUEST)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.outcome == Outcome.BAD_REQUEST:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    else:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return respond(exc.outcome)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return respond(Outcome.INTERNAL_ERROR)


@app.get("/")
def root():
    return {"status": "running", "message": "Account Service"}
