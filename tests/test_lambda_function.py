"""Tests for the API Gateway adapter."""

from __future__ import annotations

import base64
import json
import logging

import pytest

from contact_relay import lambda_function
from contact_relay.core.config import get_settings
from contact_relay.lambda_function import lambda_handler, request_from_event


def http_api_event(method="POST", path="/contact", body=None, is_base64=False):
    return {
        "version": "2.0",
        "rawPath": path,
        "headers": {"content-type": "application/json"},
        "requestContext": {"http": {"method": method, "path": path, "sourceIp": "198.51.100.4"}},
        "body": body,
        "isBase64Encoded": is_base64,
    }


def rest_api_event(method="POST", path="/contact", body=None):
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "requestContext": {"identity": {"sourceIp": "198.51.100.5"}},
        "body": body,
        "isBase64Encoded": False,
    }


@pytest.fixture
def patched_handler(monkeypatch, handler):
    monkeypatch.setattr(lambda_function, "get_handler", lambda: handler)
    return handler


# ---- Event parsing ----
def test_http_api_event():
    request = request_from_event(http_api_event(body='{"a": 1}'))
    assert request.method == "POST"
    assert request.path == "/contact"
    assert request.body == '{"a": 1}'
    assert request.source_ip == "198.51.100.4"


def test_rest_api_event():
    request = request_from_event(rest_api_event(method="OPTIONS"))
    assert request.method == "OPTIONS"
    assert request.path == "/contact"
    assert request.body is None
    assert request.source_ip == "198.51.100.5"


def test_base64_body_is_decoded():
    raw = '{"nombre": "José"}'
    encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
    request = request_from_event(http_api_event(body=encoded, is_base64=True))
    assert request.body == raw


def test_undecodable_base64_body_is_kept_raw():
    request = request_from_event(http_api_event(body="%%%not-base64%%%", is_base64=True))
    assert request.body == "%%%not-base64%%%"


def test_empty_event():
    request = request_from_event({})
    assert request.method == ""
    assert request.path == ""
    assert request.source_ip is None


# ---- lambda_handler ----
def test_lambda_preflight(patched_handler):
    result = lambda_handler(http_api_event(method="OPTIONS", path="/whatever"), None)
    assert result["statusCode"] == 204
    assert "body" not in result
    assert result["headers"]["Access-Control-Allow-Origin"] == "*"
    assert result["headers"]["Content-Type"] == "text/plain"


def test_lambda_not_found(patched_handler):
    result = lambda_handler(rest_api_event(method="GET"), None)
    assert result["statusCode"] == 404
    assert json.loads(result["body"]) == {"success": False, "message": "Not Found"}


def test_lambda_submission(patched_handler, services, submission):
    encoded = base64.b64encode(json.dumps(submission).encode("utf-8")).decode("ascii")
    result = lambda_handler(http_api_event(body=encoded, is_base64=True), None)

    assert result["statusCode"] == 200
    assert json.loads(result["body"])["success"] is True
    assert services.verify_calls[0]["remoteip"] == ["198.51.100.4"]
    assert len(services.send_calls) == 1


def test_lambda_submission_rest_api(patched_handler, services, submission):
    result = lambda_handler(rest_api_event(body=json.dumps(submission)), None)
    assert result["statusCode"] == 200
    assert len(services.send_calls) == 1


def test_lowercase_log_level_still_answers(monkeypatch):
    root = logging.getLogger()
    original_level = root.level
    monkeypatch.setenv("LOG_LEVEL", "info")
    get_settings.cache_clear()
    lambda_function.get_handler.cache_clear()
    try:
        result = lambda_handler(http_api_event(method="OPTIONS"), None)
        assert result["statusCode"] == 204
        assert root.level == logging.INFO
    finally:
        get_settings.cache_clear()
        lambda_function.get_handler.cache_clear()
        root.setLevel(original_level)
