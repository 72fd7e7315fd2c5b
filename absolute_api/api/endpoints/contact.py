"""
Contact form endpoint for the landing page.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from json import JSONDecodeError
import logging

from absolute_api.core.contact_relay import ContactRelay

router = APIRouter()
logger = logging.getLogger(__name__)


def get_relay(request: Request) -> ContactRelay:
    """Returns the relay built at startup"""
    return request.app.state.relay


@router.post("/contact")
async def submit_contact(request: Request):
    """
    Relay a contact form submission to the operator inbox.

    Expects a JSON body with name, email, phone, message and privacyAgreed.

    Returns:
        200 {success: true} when the email was accepted by the provider,
        400 when a required field is missing, 500 when delivery failed
    """
    try:
        payload = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        logger.warning("Contact submission body is not valid JSON")
        payload = None

    status_code, body = await get_relay(request).handle_contact(payload)
    return JSONResponse(status_code=status_code, content=body.model_dump())
