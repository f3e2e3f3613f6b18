import json
import logging
from datetime import datetime
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from contact_relay.constants.constants import (
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_TEXT,
    CORS_HEADERS,
    ErrorKind,
    MSG_FIELDS_REQUIRED,
    MSG_NOT_FOUND,
    MSG_SEND_ERROR,
    MSG_SENT,
    MSG_TOKEN_REQUIRED,
    PREFLIGHT_METHOD,
    SUBMIT_METHOD,
)
from contact_relay.core.config import Settings
from contact_relay.core.exceptions import (
    ConfigError,
    ContactRelayError,
    ValidationError,
    VerificationError,
)
from contact_relay.schemas.contactSchema import (
    ContactSubmission,
    EmailMessage,
    InboundRequest,
    OutboundResponse,
)
from contact_relay.services.ContactEmailTemplate import contact_subject, render_contact_email
from contact_relay.services.RecaptchaClient import RecaptchaClient
from contact_relay.services.SendGridClient import SendGridClient

logger = logging.getLogger(__name__)


def preflight_response() -> OutboundResponse:
    return OutboundResponse(
        status_code=204,
        headers={**CORS_HEADERS, "Content-Type": CONTENT_TYPE_TEXT},
    )


def json_response(status_code: int, success: bool, message: str) -> OutboundResponse:
    return OutboundResponse(
        status_code=status_code,
        headers={"Content-Type": CONTENT_TYPE_JSON, **CORS_HEADERS},
        body=json.dumps({"success": success, "message": message}),
    )


def parse_submission(body: Optional[str]) -> ContactSubmission:
    """
    Parse the raw request body into a ContactSubmission.

    A missing body counts as an empty object. Anything that is not a JSON
    object of string fields is rejected as a validation failure.
    """
    try:
        return ContactSubmission.model_validate_json(body or "{}")
    except PydanticValidationError as e:
        raise ValidationError(detail=e.errors(include_input=False)) from e


def build_contact_message(
    submission: ContactSubmission,
    settings: Settings,
    submitted_at: Optional[datetime] = None
) -> EmailMessage:
    text, html = render_contact_email(
        name=submission.name,
        email=submission.email,
        inquiry=submission.inquiry,
        submitted_at=submitted_at,
    )
    return EmailMessage(
        to=settings.TO_EMAIL,
        from_email=settings.FROM_EMAIL,
        from_name=settings.FROM_NAME,
        reply_to=submission.email,
        subject=contact_subject(submission.name),
        text=text,
        html=html,
    )


class ContactHandler:
    """
    Handles one contact-form request and produces exactly one response.

    Flow: CORS preflight, route match, parse and validate, reCAPTCHA check,
    then a single SendGrid delivery. Expected failures are raised as
    ContactRelayError subclasses and mapped to a response in ``handle``.
    """

    def __init__(
        self,
        settings: Settings,
        verifier: Optional[RecaptchaClient] = None,
        mailer: Optional[SendGridClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings
        self.verifier = verifier or RecaptchaClient(
            secret=settings.RECAPTCHA_SECRET_KEY or "",
            verify_url=settings.RECAPTCHA_VERIFY_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )
        self.mailer = mailer or SendGridClient(
            api_key=settings.SENDGRID_API_KEY,
            api_url=settings.SENDGRID_API_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def handle(self, request: InboundRequest) -> OutboundResponse:
        method = (request.method or "").upper()
        logger.info(f"Request received: {method} {request.path}")

        if method == PREFLIGHT_METHOD:
            logger.info("OPTIONS request, returning CORS headers")
            return preflight_response()

        if request.path != self.settings.CONTACT_PATH or method != SUBMIT_METHOD:
            logger.info(f"No route for {method} {request.path}")
            return json_response(404, False, MSG_NOT_FOUND)

        try:
            result = await self.submit(request)
        except ContactRelayError as e:
            self._log_failure(e)
            return json_response(e.status_code, False, e.public_message)
        except Exception as e:
            logger.exception(f"❌ Error sending email: {str(e)}")
            return json_response(500, False, MSG_SEND_ERROR)

        logger.info(f"✅ Contact message relayed (message_id: {result.get('message_id') or 'unknown'})")
        return json_response(200, True, MSG_SENT)

    async def submit(self, request: InboundRequest) -> dict:
        """Validate, verify and deliver one submission. Raises ContactRelayError on failure."""
        submission = parse_submission(request.body)

        missing = submission.missing_fields()
        if missing:
            raise ValidationError(MSG_FIELDS_REQUIRED, detail={"missing": missing})

        if not submission.verification_token:
            raise ValidationError(MSG_TOKEN_REQUIRED, detail={"missing": ["verification_token"]})

        if not self.settings.recaptcha_configured:
            raise ConfigError(detail="RECAPTCHA_SECRET_KEY not configured")

        verdict = await self.verifier.verify(submission.verification_token, remote_ip=request.source_ip)
        if not verdict.success:
            raise VerificationError(detail=verdict.model_dump(by_alias=True))

        message = build_contact_message(submission, self.settings)
        return await self.mailer.send(message)

    def _log_failure(self, error: ContactRelayError):
        if error.kind == ErrorKind.VALIDATION:
            logger.warning(f"⚠️ Submission rejected: {error.public_message} {error.detail}")
        elif error.kind == ErrorKind.VERIFICATION and error.status_code < 500:
            logger.error(f"reCAPTCHA verification failed: {error.detail}")
        else:
            logger.error(f"❌ Contact submission failed: {error.to_log_dict()}")
