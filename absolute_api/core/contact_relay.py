"""
Contact form relay.

Validates a contact submission and forwards it to the operator inbox through
the configured EmailProvider. Nothing is stored: each call builds one email,
sends it and forgets the submission.
"""

import logging
from html import escape
from typing import Any, Tuple
from fastapi import status
from pydantic import ValidationError
from absolute_api.core.config import Settings
from absolute_api.core.email_provider import EmailProvider
from absolute_api.models.contact import ContactSubmission, ContactResponse, OutboundEmail

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone", "message")

MISSING_FIELDS_MESSAGE = "All fields are required"
SENT_MESSAGE = "Email sent successfully"
SEND_FAILED_MESSAGE = "Failed to send email"


class ContactValidationError(Exception):
    """Raised when a submission lacks one of the required fields"""

    def __init__(self, missing_fields=()):
        super().__init__(MISSING_FIELDS_MESSAGE)
        self.missing_fields = tuple(missing_fields)


def validate_submission(payload: Any) -> ContactSubmission:
    """
    Parse and check a raw JSON payload.

    Args:
        payload: Decoded request body

    Returns:
        ContactSubmission: Submission with every required field present

    Raises:
        ContactValidationError: Body is not an object, has wrongly typed fields,
            or any required field is missing or blank
    """
    if not isinstance(payload, dict):
        raise ContactValidationError(REQUIRED_FIELDS)

    try:
        submission = ContactSubmission.model_validate(payload)
    except ValidationError as e:
        bad_fields = [str(err["loc"][0]) for err in e.errors() if err.get("loc")]
        raise ContactValidationError(bad_fields) from e

    missing = [
        field for field in REQUIRED_FIELDS
        if not (getattr(submission, field) or "").strip()
    ]
    if missing:
        raise ContactValidationError(missing)

    return submission


def render_html(submission: ContactSubmission) -> str:
    name = escape(submission.name)
    email = escape(submission.email)
    phone = escape(submission.phone)
    message = escape(submission.message)
    privacy = "Yes" if bool(submission.privacy_agreed) else "No"

    return f"""
<div style="font-family: sans-serif; padding: 20px; border: 1px solid #e0e0e0; border-radius: 8px;">
  <h2 style="color: #4f46e5;">New Contact Form Submission</h2>
  <div style="margin-bottom: 20px;">
    <p style="margin: 5px 0;"><strong>Name:</strong> {name}</p>
    <p style="margin: 5px 0;"><strong>Email:</strong> {email}</p>
    <p style="margin: 5px 0;"><strong>Phone:</strong> <a href="tel:{phone}" style="color: #4f46e5;">{phone}</a></p>
    <p style="margin: 5px 0; font-size: 12px; color: #666;"><strong>Privacy Policy Agreed:</strong> {privacy}</p>
  </div>
  <hr style="border: 0; border-top: 1px solid #eee;" />
  <p><strong>Message:</strong></p>
  <p style="background: #f4f4f4; padding: 15px; border-radius: 5px; color: #333; white-space: pre-wrap;">{message}</p>
</div>
""".strip()


def render_text(submission: ContactSubmission) -> str:
    privacy = "Yes" if bool(submission.privacy_agreed) else "No"
    return (
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone}\n"
        f"Privacy Policy Agreed: {privacy}\n"
        f"\n"
        f"Message:\n"
        f"{submission.message}\n"
    )


class ContactRelay:
    """
    Stateless handler behind POST /api/contact.

    Args:
        settings: Application settings (sender and operator addresses)
        provider: Email provider used for delivery
    """

    def __init__(self, settings: Settings, provider: EmailProvider):
        self.settings = settings
        self.provider = provider

    def build_email(self, submission: ContactSubmission) -> OutboundEmail:
        return OutboundEmail(
            sender=self.settings.email_from,
            to=self.settings.my_email or "",
            reply_to=submission.email,
            subject=f"New Inquiry from {submission.name}",
            html=render_html(submission),
            text=render_text(submission),
        )

    async def handle_contact(self, payload: Any) -> Tuple[int, ContactResponse]:
        """
        Validate a submission and relay it to the operator inbox.

        Returns:
            tuple: (HTTP status code, response body)
        """
        try:
            submission = validate_submission(payload)
        except ContactValidationError as e:
            logger.warning(f"Rejected contact submission, missing or invalid: {', '.join(e.missing_fields)}")
            return status.HTTP_400_BAD_REQUEST, ContactResponse(success=False, message=MISSING_FIELDS_MESSAGE)

        email = self.build_email(submission)

        try:
            result = await self.provider.send(email)
        except Exception as e:
            logger.error(f"❌ Error sending email: {str(e)}")
            return status.HTTP_500_INTERNAL_SERVER_ERROR, ContactResponse(success=False, message=SEND_FAILED_MESSAGE)

        logger.info(f"✅ Email sent successfully: {result}")
        return status.HTTP_200_OK, ContactResponse(success=True, message=SENT_MESSAGE)
