"""Constants for CORS headers, response messages, error kinds and outbound endpoints."""

from enum import Enum


class ErrorKind(str, Enum):
    """Enumeration of the internal failure causes of a contact submission."""

    VALIDATION = "validation"
    CONFIG = "config"
    VERIFICATION = "verification"
    DELIVERY = "delivery"


# ------------------------------
# HTTP surface
# ------------------------------
PREFLIGHT_METHOD = "OPTIONS"
SUBMIT_METHOD = "POST"
DEFAULT_CONTACT_PATH = "/contact"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With",
    "Access-Control-Max-Age": "86400",
}

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_TEXT = "text/plain"


# ------------------------------
# Response messages
# ------------------------------
MSG_NOT_FOUND = "Not Found"
MSG_INVALID_BODY = "Invalid request body"
MSG_FIELDS_REQUIRED = "All fields are required: email, name, inquiry"
MSG_TOKEN_REQUIRED = "Please complete the reCAPTCHA"
MSG_SERVER_CONFIG = "Server configuration error"
MSG_VERIFICATION_FAILED = "reCAPTCHA verification failed. Please try again."
MSG_SEND_ERROR = "Error sending message"
MSG_SENT = "Message sent successfully"


# ------------------------------
# Outbound services
# ------------------------------
RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"

DEFAULT_TO_EMAIL = "pablo@dolphintech.io"
DEFAULT_FROM_NAME = "VRR - WEB FORM"
