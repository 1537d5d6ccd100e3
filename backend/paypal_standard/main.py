"""
PayPal Standard Backend - FastAPI Application

Serves PayPal Website Payments Standard cart payloads, either as an ordered
field list for client-side forms or as a ready-to-post HTML form.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from . import __version__
from .config import settings
from .exceptions import PaymentFormError
from .models.order import GATEWAY_URL
from .api.checkout import router as checkout_router


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log merchant configuration on startup and shutdown."""
    logger.info("Starting PayPal Standard backend server...")
    logger.info(f"Gateway: {GATEWAY_URL}")
    logger.info(f"Default currency: {settings.currency_code}")
    if not settings.paypal_email:
        logger.warning("No default PayPal email configured, requests must supply a recipient")

    yield

    logger.info("Shutting down PayPal Standard backend server...")


# Initialize FastAPI application
app = FastAPI(
    title="PayPal Standard API",
    description="PayPal Website Payments Standard cart form builder",
    version=__version__,
    lifespan=lifespan,
)


# Configure CORS middleware for storefront clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error_code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details or {}},
    )


@app.exception_handler(PaymentFormError)
async def payment_form_error_handler(request: Request, exc: PaymentFormError):
    logger.warning(f"{request.url.path} rejected: {exc.error_code} ({exc.message})")
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning(f"{request.url.path} rejected: {exc}")
    return _error_response(400, "validation_error", str(exc))


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    """Log the traceback; only debug mode reveals the exception type."""
    logger.error(f"{request.url.path} failed", exc_info=True)
    details = {"error_type": type(exc).__name__} if settings.debug else {}
    return _error_response(500, "internal_error", "An unexpected error occurred", details)


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Liveness check reporting version and whether a default recipient is set."""
    return {
        "status": "healthy",
        "version": __version__,
        "gateway": GATEWAY_URL,
        "default_recipient_configured": bool(settings.paypal_email),
    }


# Include API routers
app.include_router(checkout_router, prefix="/api/checkout", tags=["Checkout"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "paypal_standard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
