"""Tagged errors raised while handling a contact submission."""

from typing import Any, Dict, Optional

from contact_relay.constants.constants import (
    ErrorKind,
    MSG_INVALID_BODY,
    MSG_SEND_ERROR,
    MSG_SERVER_CONFIG,
    MSG_VERIFICATION_FAILED,
)


class ContactRelayError(Exception):
    """
    Base error for every expected failure of the contact flow.

    Each error carries the kind of failure, the HTTP status it maps to and the
    message shown to the caller. ``detail`` holds server-side diagnostics that
    are logged but never returned.
    """

    kind: ErrorKind = ErrorKind.DELIVERY
    status_code: int = 500
    public_message: str = MSG_SEND_ERROR

    def __init__(
        self,
        public_message: Optional[str] = None,
        status_code: Optional[int] = None,
        detail: Any = None,
    ):
        if public_message is not None:
            self.public_message = public_message
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail
        super().__init__(self.public_message)

    def to_log_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "status_code": self.status_code,
            "message": self.public_message,
            "detail": self.detail,
        }


class ValidationError(ContactRelayError):
    """The submission is malformed or incomplete."""

    kind = ErrorKind.VALIDATION
    status_code = 400
    public_message = MSG_INVALID_BODY


class ConfigError(ContactRelayError):
    """The function is missing configuration it needs to run."""

    kind = ErrorKind.CONFIG
    status_code = 500
    public_message = MSG_SERVER_CONFIG


class VerificationError(ContactRelayError):
    """The human verification was negative, or the service could not be reached."""

    kind = ErrorKind.VERIFICATION
    status_code = 400
    public_message = MSG_VERIFICATION_FAILED


class DeliveryError(ContactRelayError):
    """The email delivery service rejected the message or could not be reached."""

    kind = ErrorKind.DELIVERY
    status_code = 500
    public_message = MSG_SEND_ERROR
