"""Transactional email via Brevo"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
import structlog

from app.config import settings

logger = structlog.get_logger()


class EmailDeliveryError(Exception):
    """Email provider rejected or could not take the message"""


class BaseEmailSender(ABC):
    """Abstract base class for email senders"""

    @abstractmethod
    async def send_template(
        self,
        template_id: int,
        to_email: str,
        to_name: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> None:
        """Send a provider-side template to a single recipient"""
        pass


class BrevoEmailSender(BaseEmailSender):
    """Brevo transactional email API (``POST /smtp/email``)"""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.brevo.com/v3",
        sender_email: Optional[str] = None,
        sender_name: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.timeout = timeout
        self._transport = transport

    async def send_template(
        self,
        template_id: int,
        to_email: str,
        to_name: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> None:
        recipient = {"email": to_email}
        if to_name:
            recipient["name"] = to_name

        payload = {
            "templateId": template_id,
            "to": [recipient],
            "params": params or {},
        }
        if self.sender_email:
            payload["sender"] = {"email": self.sender_email, "name": self.sender_name}

        headers = {
            "api-key": self.api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(f"{self.base_url}/smtp/email", json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"Brevo returned {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Brevo request failed: {e}") from e

        logger.info("Email sent", provider="brevo", template_id=template_id, to=to_email)


class NoopEmailSender(BaseEmailSender):
    """Used when no Brevo API key is configured"""

    async def send_template(
        self,
        template_id: int,
        to_email: str,
        to_name: Optional[str] = None,
        params: Optional[dict] = None,
    ) -> None:
        logger.warning("Email not sent, no provider configured", template_id=template_id, to=to_email)


def get_email_sender() -> BaseEmailSender:
    """FastAPI dependency returning the configured sender"""
    if not settings.brevo_api_key:
        return NoopEmailSender()
    return BrevoEmailSender(
        api_key=settings.brevo_api_key,
        base_url=settings.brevo_api_url,
        sender_email=settings.brevo_sender_email,
        sender_name=settings.brevo_sender_name,
    )
