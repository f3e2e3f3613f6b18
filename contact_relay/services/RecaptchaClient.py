"""Google reCAPTCHA verification client."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from contact_relay.constants.constants import MSG_SEND_ERROR, RECAPTCHA_VERIFY_URL
from contact_relay.core.exceptions import VerificationError
from contact_relay.schemas.contactSchema import VerificationResult

logger = logging.getLogger(__name__)


class RecaptchaClient:
    """
    Client for checking a reCAPTCHA response token against Google's siteverify API.

    The call is made exactly once per token; a negative verdict is returned as a
    ``VerificationResult`` and left to the caller, while transport failures and
    unreadable replies are raised as ``VerificationError`` with a 500 status.
    """

    def __init__(
        self,
        secret: str,
        verify_url: str = RECAPTCHA_VERIFY_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.secret = secret
        self.verify_url = verify_url
        self.timeout = timeout
        self._transport = transport

    async def verify(self, token: str, remote_ip: Optional[str] = None) -> VerificationResult:
        """
        Verify a response token.

        Args:
            token: The token produced by the reCAPTCHA widget on the form
            remote_ip: The submitter's IP address, forwarded when known

        Returns:
            VerificationResult with the success flag and Google's diagnostics
        """
        data = {
            "secret": self.secret,
            "response": token,
        }
        if remote_ip:
            data["remoteip"] = remote_ip

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(self.verify_url, data=data)
                response.raise_for_status()
                result = VerificationResult.model_validate(response.json())
            except httpx.HTTPStatusError as e:
                logger.error(f"reCAPTCHA API error: {e.response.status_code} - {e.response.text}")
                raise VerificationError(
                    MSG_SEND_ERROR,
                    status_code=500,
                    detail={"status_code": e.response.status_code, "body": e.response.text},
                ) from e
            except httpx.HTTPError as e:
                logger.error(f"reCAPTCHA request failed: {str(e)}")
                raise VerificationError(MSG_SEND_ERROR, status_code=500, detail=str(e)) from e
            except (ValueError, PydanticValidationError) as e:
                logger.error(f"reCAPTCHA returned an unreadable reply: {str(e)}")
                raise VerificationError(MSG_SEND_ERROR, status_code=500, detail=str(e)) from e

        logger.info(f"reCAPTCHA verdict: success={result.success} hostname={result.hostname}")
        return result
