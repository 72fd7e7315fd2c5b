#run it with uvicorn absolute_api.main:app --reload
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from absolute_api.api.api_router import api_router
from absolute_api.core.config import Settings, get_settings
from absolute_api.core.contact_relay import ContactRelay
from absolute_api.core.email_provider import EmailProvider, ResendEmailProvider
from dotenv import load_dotenv
from typing import Optional
import logging
import uvicorn

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()


def create_app(settings: Optional[Settings] = None, provider: Optional[EmailProvider] = None) -> FastAPI:
    """
    Build the API with its configuration and email provider wired in.

    Args:
        settings: Application settings, read from the environment when omitted
        provider: Email provider, a ResendEmailProvider when omitted
    """
    if settings is None:
        settings = get_settings()
    if provider is None:
        provider = ResendEmailProvider(settings.resend_api_key, settings.resend_api_url)

    logging.getLogger().setLevel(settings.log_level)

    if not settings.email_configured:
        if not settings.resend_api_key:
            logger.warning("⚠️ RESEND_API_KEY is not set, contact emails will fail to send")
        if not settings.my_email:
            logger.warning("⚠️ MY_EMAIL is not set, contact emails have no destination inbox")

    app = FastAPI(title="Absolute Analytics API", version="1.0.0")
    app.state.settings = settings
    app.state.relay = ContactRelay(settings, provider)

    # CORS setup, every origin is allowed unless ALLOWED_ORIGINS narrows it
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Absolute Analytics API (Resend) is running"

    @app.get("/api/health")
    def health_check(request: Request):
        """
        Health check endpoint.

        Reports whether email delivery is configured without exposing the values.
        """
        current = request.app.state.settings
        return {
            "status": "ok",
            "env_vars": {
                "resend_api_key": bool(current.resend_api_key),
                "my_email": bool(current.my_email),
            },
        }

    return app


app = create_app()


def run():
    """Start the API server on the configured port"""
    settings = get_settings()
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
