"""
Contact form controller for the landing page.

Holds the form's field values and its submission status, and posts the
record to the relay. Status moves through idle -> loading -> success/error;
success falls back to idle on its own after a short delay, error stays until
the visitor submits again.
"""

import asyncio
import httpx
import logging
from enum import Enum
from typing import Any, Dict, Optional
from absolute_api.core.config import Settings

logger = logging.getLogger(__name__)

SUCCESS_RESET_DELAY = 3.0  # seconds

TEXT_FIELDS = ("name", "email", "phone", "message")


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


ALLOWED_TRANSITIONS = {
    SubmissionStatus.IDLE: {SubmissionStatus.LOADING},
    SubmissionStatus.LOADING: {SubmissionStatus.SUCCESS, SubmissionStatus.ERROR},
    SubmissionStatus.SUCCESS: {SubmissionStatus.IDLE},
    SubmissionStatus.ERROR: {SubmissionStatus.LOADING},
}

STATUS_LABELS = {
    SubmissionStatus.IDLE: "Send Message",
    SubmissionStatus.LOADING: "Sending...",
    SubmissionStatus.SUCCESS: "Message Sent Successfully",
    SubmissionStatus.ERROR: "Failed. Try Again.",
}


class InvalidStatusTransition(Exception):
    def __init__(self, current: SubmissionStatus, target: SubmissionStatus):
        super().__init__(f"Cannot move contact form from {current.value} to {target.value}")
        self.current = current
        self.target = target


def empty_form() -> Dict[str, Any]:
    return {"name": "", "email": "", "phone": "", "message": "", "privacyAgreed": False}


class ContactForm:
    """
    Args:
        endpoint_url: Relay URL the form posts to
        transport: Optional httpx transport, used to stub the relay in tests
        success_reset_delay: Seconds before a success status returns to idle
    """

    def __init__(
        self,
        endpoint_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        success_reset_delay: float = SUCCESS_RESET_DELAY,
    ):
        self.endpoint_url = endpoint_url
        self.transport = transport
        self.success_reset_delay = success_reset_delay
        self.data = empty_form()
        self._status = SubmissionStatus.IDLE

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ContactForm":
        return cls(settings.contact_endpoint_url, **kwargs)

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self._status]

    @property
    def can_submit(self) -> bool:
        """False while the submit button is disabled"""
        return self._status not in (SubmissionStatus.LOADING, SubmissionStatus.SUCCESS)

    @property
    def is_complete(self) -> bool:
        """Every required input is filled and the privacy box is ticked"""
        filled = all(str(self.data[field]).strip() for field in TEXT_FIELDS)
        return filled and bool(self.data["privacyAgreed"])

    def update_field(self, name: str, value: Any) -> None:
        if name not in self.data:
            raise KeyError(name)
        self.data[name] = value

    def transition(self, target: SubmissionStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[self._status]:
            raise InvalidStatusTransition(self._status, target)
        logger.debug(f"Contact form status {self._status.value} -> {target.value}")
        self._status = target

    def reset(self) -> None:
        self.data = empty_form()

    def _expire_success(self) -> None:
        if self._status is SubmissionStatus.SUCCESS:
            self.transition(SubmissionStatus.IDLE)

    async def submit(self) -> bool:
        """
        Post the current record to the relay.

        Returns:
            bool: True when the relay reported success. False when the relay
            reported failure, the request failed, or nothing was sent because
            the form is disabled or incomplete.
        """
        if not self.can_submit:
            logger.debug(f"Ignoring submit while {self._status.value}")
            return False
        if not self.is_complete:
            logger.debug("Ignoring submit, required fields are empty")
            return False

        self.transition(SubmissionStatus.LOADING)

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.endpoint_url,
                    json=self.data,
                    headers={"Content-Type": "application/json"},
                )
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error submitting contact form: {str(e)}")
            self.transition(SubmissionStatus.ERROR)
            return False

        if not isinstance(result, dict) or not result.get("success"):
            logger.error(f"Contact form submission failed: {result}")
            self.transition(SubmissionStatus.ERROR)
            return False

        self.transition(SubmissionStatus.SUCCESS)
        self.reset()
        loop = asyncio.get_running_loop()
        loop.call_later(self.success_reset_delay, self._expire_success)
        return True
