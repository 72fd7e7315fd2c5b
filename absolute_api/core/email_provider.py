"""
Transactional email delivery.

The relay only depends on the EmailProvider capability: send a formatted
message and either return the provider's response or raise EmailDeliveryError.
ResendEmailProvider is the production implementation backed by the Resend
REST API.
"""

import httpx
import logging
from typing import Dict, Any, Optional
from absolute_api.models.contact import OutboundEmail

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the provider could not accept a message"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EmailProvider:
    """Capability interface for anything that can deliver an OutboundEmail"""

    async def send(self, email: OutboundEmail) -> Dict[str, Any]:
        raise NotImplementedError


class ResendEmailProvider(EmailProvider):
    """
    Deliver messages through the Resend API.

    Args:
        api_key: Resend API key (Bearer token)
        api_url: Resend send endpoint
        transport: Optional httpx transport, used to stub the network in tests
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.resend.com/emails",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.transport = transport

    def build_payload(self, email: OutboundEmail) -> Dict[str, Any]:
        payload = {
            "from": email.sender,
            "to": [email.to],
            "reply_to": email.reply_to,
            "subject": email.subject,
            "html": email.html,
        }
        if email.text:
            payload["text"] = email.text
        return payload

    async def send(self, email: OutboundEmail) -> Dict[str, Any]:
        if not self.api_key:
            raise EmailDeliveryError("Resend API key is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    headers=headers,
                    json=self.build_payload(email),
                )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Resend request failed: {str(e)}") from e

        if not response.is_success:
            logger.error(f"Resend API error: {response.status_code} - {response.text}")
            raise EmailDeliveryError(
                f"Resend rejected the message with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        logger.info(f"Resend accepted message: {data.get('id', 'unknown id')}")
        return data
