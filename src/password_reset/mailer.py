# src/password_reset/mailer.py
import logging

from azure.communication.email import EmailClient
from starlette.concurrency import run_in_threadpool

from src.auth.utils import mask_email
from src.config import email_settings
from src.password_reset.config import password_reset_settings
from src.password_reset.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


def build_otp_email(code: str) -> dict:
    app_name = email_settings.APP_NAME
    minutes = password_reset_settings.OTP_TTL_SECONDS // 60
    html_content = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h2 style="color: #333;">Password Reset Request</h2>
        <p>Your {app_name} password reset code is:</p>
        <div style="background-color: #f5f5f5;
         padding: 20px; text-align: center; margin: 20px 0;">
            <div style="font-size: 20px; font-weight: bold;
             letter-spacing: 3px; color: #2c3e50;">
                <strong>{code}</strong>
            </div>
        </div>
        <p>This code expires in <b>{minutes} minutes</b>.</p>
        <p style="color: #666; font-size: 14px;">
            If you didn't request this password reset,
             please ignore this email.
              Your password will remain unchanged.
        </p>
    </div>
    """
    return {
        "subject": "Your password reset code",
        "html": html_content,
        "plainText": (
            f"Your {app_name} password reset code is: {code}. "
            f"It expires in {minutes} minutes."
        ),
    }


async def send_otp_email(to_email: str, code: str) -> None:
    if not email_settings.COMMUNICATION_SERVICES_CONNECTION_STRING:
        logger.critical("Email service not configured")
        raise EmailDeliveryError("Email service not configured")

    message = {
        "content": build_otp_email(code),
        "recipients": {"to": [{"address": to_email}]},
        "senderAddress": email_settings.SENDER_ADDRESS,
    }

    def _send() -> dict:
        email_client = EmailClient.from_connection_string(
            email_settings.COMMUNICATION_SERVICES_CONNECTION_STRING
        )
        poller = email_client.begin_send(message)
        return poller.result()

    try:
        result = await run_in_threadpool(_send)
    except Exception as e:
        logger.exception("Email sending failed for %s", mask_email(to_email))
        raise EmailDeliveryError("Failed to send verification email") from e

    if result["status"] == "Succeeded":
        logger.info("Reset email sent to %s with ID: %s", mask_email(to_email), result["id"])
    else:
        logger.warning("Reset email to %s finished with status: %s", mask_email(to_email), result["status"])
