from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional

class ContactSubmission(BaseModel):
    """Payload posted by the landing page contact form"""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None  # Not checked for address syntax
    phone: Optional[str] = None
    message: Optional[str] = None
    privacy_agreed: Any = Field(False, alias="privacyAgreed")  # Echoed in the email, never validated

class ContactResponse(BaseModel):
    success: bool
    message: str

class OutboundEmail(BaseModel):
    """Message handed to the email provider"""
    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(..., alias="from")
    to: str
    reply_to: str
    subject: str
    html: str
    text: Optional[str] = None
