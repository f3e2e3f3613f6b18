"""
Shared fixtures for the contact relay tests.

Outbound reCAPTCHA and SendGrid calls go through an httpx.MockTransport that
records every request, so the real clients and handler run end to end
without touching the network.
"""

from __future__ import annotations

import asyncio
import json
from urllib.parse import parse_qs

import httpx
import pytest

from contact_relay.api.v1.endpoints.contact import ContactHandler
from contact_relay.core.config import Settings
from contact_relay.schemas.contactSchema import InboundRequest

RECAPTCHA_HOST = "www.google.com"
SENDGRID_HOST = "api.sendgrid.com"


class FakeServices:
    """Answers outbound requests the way reCAPTCHA and SendGrid would."""

    def __init__(self):
        self.verdict = {"success": True, "hostname": "vrr.example", "challenge_ts": "2024-01-01T00:00:00Z"}
        self.verify_status = 200
        self.verify_text = None
        self.sendgrid_status = 202
        self.sendgrid_text = ""
        self.unreachable = set()
        self.verify_calls = []
        self.send_calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if host == RECAPTCHA_HOST:
            self.verify_calls.append(parse_qs(request.content.decode()))
            if self.verify_text is not None:
                return httpx.Response(self.verify_status, text=self.verify_text)
            return httpx.Response(self.verify_status, json=self.verdict)

        if host == SENDGRID_HOST:
            self.send_calls.append({
                "authorization": request.headers.get("Authorization"),
                "json": json.loads(request.content),
            })
            return httpx.Response(
                self.sendgrid_status,
                text=self.sendgrid_text,
                headers={"X-Message-Id": "sg-message-1"},
            )

        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def services():
    return FakeServices()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        SENDGRID_API_KEY="SG.test-key",
        RECAPTCHA_SECRET_KEY="test-secret",
        TO_EMAIL="inbox@vrr.example",
        FROM_EMAIL="web@vrr.example",
        FROM_NAME="VRR - WEB FORM",
        CONTACT_PATH="/contact",
    )


@pytest.fixture
def handler(settings, services):
    return ContactHandler(settings, transport=services.transport)


@pytest.fixture
def call(handler):
    """Run one request through the handler; returns (status, headers, decoded body)."""

    def _call(payload=None, method="POST", path="/contact", body=None, source_ip="203.0.113.7"):
        if body is None and payload is not None:
            body = json.dumps(payload)
        request = InboundRequest(method=method, path=path, body=body, source_ip=source_ip)
        response = asyncio.run(handler.handle(request))
        decoded = json.loads(response.body) if response.body else None
        return response.status_code, response.headers, decoded

    return _call


@pytest.fixture
def submission():
    return {
        "email": "a@b.com",
        "nombre": "Jane",
        "consulta": "Hi",
        "recaptchaToken": "tok",
    }
