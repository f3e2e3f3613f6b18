# API Gateway trigger for the contact form.
#
# Handles both REST API (payload v1) and HTTP API (payload v2) proxy events.

import asyncio
import base64
import binascii
import logging
from functools import lru_cache
from typing import Optional

from contact_relay.api.v1.endpoints.contact import ContactHandler
from contact_relay.core.config import get_settings
from contact_relay.schemas.contactSchema import InboundRequest

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _method(event: dict) -> str:
    # HTTP API v2
    method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    if method:
        return method
    # REST API fallback
    return event.get("httpMethod") or ""


def _source_ip(event: dict) -> Optional[str]:
    context = event.get("requestContext") or {}
    return (
        (context.get("http") or {}).get("sourceIp")
        or (context.get("identity") or {}).get("sourceIp")
    )


def _body(event: dict) -> Optional[str]:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError):
            logger.warning("⚠️ Body flagged as base64 but could not be decoded")
    return body


def request_from_event(event: dict) -> InboundRequest:
    """Build an InboundRequest from an API Gateway proxy event."""
    return InboundRequest(
        method=_method(event),
        path=event.get("rawPath") or event.get("path") or "",
        body=_body(event),
        source_ip=_source_ip(event),
    )


@lru_cache()
def get_handler() -> ContactHandler:
    """The handler is built once per runtime and reused across warm invocations."""
    settings = get_settings()
    logging.getLogger().setLevel(settings.LOG_LEVEL)
    return ContactHandler(settings)


def lambda_handler(event, context):
    request = request_from_event(event or {})
    response = asyncio.run(get_handler().handle(request))
    return response.to_lambda_result()
