from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class InboundRequest(BaseModel):
    """One HTTP-like request as seen by the contact handler."""
    method: str
    path: str
    body: Optional[str] = None
    source_ip: Optional[str] = None


class OutboundResponse(BaseModel):
    """One HTTP-like response, shaped like an API Gateway proxy result."""
    status_code: int
    headers: Dict[str, str]
    body: Optional[str] = None

    def to_lambda_result(self) -> Dict[str, Any]:
        result = {"statusCode": self.status_code, "headers": dict(self.headers)}
        if self.body is not None:
            result["body"] = self.body
        return result


class ContactSubmission(BaseModel):
    """
    Contact form body.

    The form posts Spanish keys (``nombre``, ``consulta``, ``recaptchaToken``);
    the English names are accepted as well.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    email: Optional[str] = None
    name: Optional[str] = Field(None, validation_alias=AliasChoices("nombre", "name"))
    inquiry: Optional[str] = Field(None, validation_alias=AliasChoices("consulta", "inquiry"))
    verification_token: Optional[str] = Field(
        None, validation_alias=AliasChoices("recaptchaToken", "verificationToken")
    )

    def missing_fields(self) -> List[str]:
        """Names of the required contact fields that are absent or empty."""
        return [
            field
            for field in ("email", "name", "inquiry")
            if not getattr(self, field)
        ]


class VerificationResult(BaseModel):
    """Verdict returned by the reCAPTCHA siteverify endpoint."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    success: bool = False
    error_codes: List[str] = Field(default_factory=list, alias="error-codes")
    hostname: Optional[str] = None
    challenge_ts: Optional[str] = None


class EmailMessage(BaseModel):
    """Message handed to the delivery service."""
    to: str
    from_email: Optional[str] = None
    from_name: str
    reply_to: Optional[str] = None
    subject: str
    text: str
    html: str
