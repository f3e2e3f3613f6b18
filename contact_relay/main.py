import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response

from contact_relay.api.v1.endpoints.contact import ContactHandler
from contact_relay.core.config import get_settings
from contact_relay.schemas.contactSchema import InboundRequest

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

RELAY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""
    settings = get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL)

    logger.info("🚀 Starting contact relay...")
    app.state.contact_handler = ContactHandler(settings)
    logger.info(f"✅ Accepting submissions on POST {settings.CONTACT_PATH}")
    try:
        yield
    finally:
        logger.info("👋 Contact relay shutdown complete")


# CORS is answered by ContactHandler itself so the ASGI app and the
# Lambda function send identical headers.
app = FastAPI(
    title="Contact Relay",
    description="Contact form relay: reCAPTCHA verification and SendGrid delivery",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    logger.info(f"Origin: {request.headers.get('origin')}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


@app.api_route("/{path:path}", methods=RELAY_METHODS, include_in_schema=False)
async def relay(request: Request, path: str):
    raw_body = await request.body()
    inbound = InboundRequest(
        method=request.method,
        path=request.url.path,
        body=raw_body.decode("utf-8", errors="replace") if raw_body else None,
        source_ip=request.client.host if request.client else None,
    )
    outbound = await request.app.state.contact_handler.handle(inbound)
    return Response(
        content=outbound.body or "",
        status_code=outbound.status_code,
        headers=outbound.headers,
    )
