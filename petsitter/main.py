import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import all models to ensure they're registered with SQLAlchemy Base
# This is needed for relationships between models in different files
from . import (
    models,  # noqa: F401
    models_messaging,  # noqa: F401
    models_transaction,  # noqa: F401
    models_visit,  # noqa: F401
)
from .config import CORS_ORIGINS, SECURITY_HEADERS_ENABLED
from .database import Base, engine
from .domain.pets import router as pets_router
from .domain.reviews import router as reviews_router
from .domain.scheduling import router as scheduling_router
from .domain.sitter_profiles import router as sitter_profiles_router
from .domain.visits import router as visits_router
from .routes.auth import router as auth_router
from .routes.messages import router as messages_router
from .routes.notifications import router as notifications_router
from .routes.transactions import router as transactions_router
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("passlib").setLevel(logging.ERROR)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="PetSitter API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    # For other validation errors, return 422 as normal
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/docs", "/openapi.json"])
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {CORS_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(pets_router)
api_router.include_router(sitter_profiles_router)
api_router.include_router(visits_router)
api_router.include_router(reviews_router)
api_router.include_router(messages_router)
api_router.include_router(scheduling_router)
api_router.include_router(notifications_router)
api_router.include_router(transactions_router)


@api_router.get("/health")
def health():
    return {"status": "healthy"}


app.include_router(api_router, prefix=API_PREFIX)


@app.get("/")
def root():
    return {"message": "PetSitter API is running"}
