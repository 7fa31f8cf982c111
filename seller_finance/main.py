import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seller_finance.api.router import api_router
from seller_finance.core.config import settings
from seller_finance.core.exceptions import FinanceAPIError
from seller_finance.services.data_source import build_data_source

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup: a bad warehouse configuration stops the service here
    logger.info("Starting seller finance API...")
    app.state.data_source = build_data_source(settings)
    logger.info(f"✅ Data source ready: {app.state.data_source.name}")

    yield

    # Shutdown
    logger.info("Shutting down seller finance API...")
    app.state.data_source.close()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.exception_handler(FinanceAPIError)
async def finance_error_handler(request: Request, exc: FinanceAPIError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'][1:])}: {err['msg']}" for err in exc.errors()
    )
    logger.warning(f"{request.method} {request.url.path}: invalid parameters ({details})")
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request parameters: {details}"},
    )
