"""
Verification email service (async).
===================================

Sends the 6-digit account verification code by email over SMTP.
The sender never raises: callers get an ``EmailDispatchResult`` and decide
how to surface a failed delivery.
"""
import logging
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import aiosmtplib

from ..core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDispatchResult:
    success: bool
    message: str


def _build_html_body(username: str, verify_code: str) -> str:
    """Build the HTML body carrying the verification code."""
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Verification Code</title>
</head>
<body style="font-family:Roboto,Verdana,sans-serif;background:#f5f5f5;margin:0;padding:24px;">
  <div style="max-width:560px;margin:0 auto;background:#fff;border-radius:8px;padding:24px;">
    <h2 style="margin-top:0;">Hello {username},</h2>
    <p>Thank you for registering. Please use the following verification code to complete your registration:</p>
    <p style="font-size:28px;letter-spacing:6px;font-weight:600;">{verify_code}</p>
    <p>This code expires in one hour.</p>
    <p style="font-size:12px;color:#888;">If you did not request this code, please ignore this email.</p>
  </div>
</body>
</html>
"""


def _build_text_body(username: str, verify_code: str) -> str:
    return (
        f"Hello {username},\n\n"
        f"Your Mystery Message verification code is {verify_code}.\n"
        "It expires in one hour.\n\n"
        "If you did not request this code, please ignore this email.\n"
    )


class SmtpVerificationEmailSender:
    """Dispatches verification codes through the configured SMTP server."""

    SUBJECT = "Mystery Message | Verification Code"

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    @property
    def is_configured(self) -> bool:
        s = self.settings
        return bool(s.smtp_host and s.smtp_user and s.smtp_password)

    def build_message(self, email: str, username: str, verify_code: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = self.SUBJECT
        msg["From"] = f"{self.settings.email_from_name} <{self.settings.email_from}>"
        msg["To"] = email
        msg.attach(MIMEText(_build_text_body(username, verify_code), "plain", "utf-8"))
        msg.attach(MIMEText(_build_html_body(username, verify_code), "html", "utf-8"))
        return msg

    async def send_verification_email(
        self,
        email: str,
        username: str,
        verify_code: str,
    ) -> EmailDispatchResult:
        """
        Send a verification email asynchronously.

        Args:
            email: Recipient address.
            username: Username the code was issued for.
            verify_code: The 6-digit code.

        Returns:
            EmailDispatchResult with success flag and message. Logs errors; does not raise.
        """
        if not self.is_configured:
            logger.warning("[email_service] SMTP not configured; set SMTP_HOST, SMTP_USER, SMTP_PASSWORD")
            return EmailDispatchResult(False, "Failed to send verification email")

        settings = self.settings
        logger.info(
            "[email_service] Sending verification email | username=%s | smtp=%s:%s",
            username, settings.smtp_host, settings.smtp_port,
        )

        try:
            await aiosmtplib.send(
                self.build_message(email, username, verify_code),
                sender=settings.email_from,
                recipients=[email],
                hostname=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_user,
                password=settings.smtp_password,
                use_tls=settings.smtp_use_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.exception("[email_service] Failed to send verification email: %s", e)
            return EmailDispatchResult(False, "Failed to send verification email")

        logger.info("[email_service] Verification email sent | username=%s", username)
        return EmailDispatchResult(True, "Verification email sent successfully")
