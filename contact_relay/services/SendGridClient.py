"""SendGrid v3 mail client."""

import logging
from typing import Any, Dict, Optional

import httpx

from contact_relay.constants.constants import SENDGRID_API_URL
from contact_relay.core.exceptions import DeliveryError
from contact_relay.schemas.contactSchema import EmailMessage

logger = logging.getLogger(__name__)


class SendGridClient:
    """Client for sending a single email through the SendGrid Mail Send API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = SENDGRID_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    @staticmethod
    def build_payload(message: EmailMessage) -> Dict[str, Any]:
        """Build the Mail Send request body for a message."""
        payload = {
            "personalizations": [
                {"to": [{"email": message.to}]}
            ],
            "from": {
                "email": message.from_email,
                "name": message.from_name
            },
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html}
            ]
        }
        if message.reply_to:
            payload["reply_to"] = {"email": message.reply_to}
        return payload

    async def send(self, message: EmailMessage) -> dict:
        """
        Send an email. SendGrid answers 202 Accepted on success.

        Raises:
            DeliveryError: the API rejected the message or could not be reached
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.api_url,
                    headers=headers,
                    json=self.build_payload(message)
                )
            except httpx.HTTPError as e:
                logger.error(f"❌ [SendGrid] Request failed: {str(e)}")
                raise DeliveryError(detail=str(e)) from e

        if not response.is_success:
            error_detail = response.text
            logger.error(f"❌ [SendGrid] Failed to send email: {response.status_code} - {error_detail}")
            raise DeliveryError(
                detail={"status_code": response.status_code, "body": error_detail}
            )

        logger.info(f"✅ [SendGrid] Email sent to {message.to} (reply-to: {message.reply_to or 'none'})")

        return {
            "status": "sent",
            "to": message.to,
            "reply_to": message.reply_to,
            "subject": message.subject,
            "message_id": response.headers.get("X-Message-Id")
        }
