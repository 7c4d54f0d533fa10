"""Utility modules for the Mystery Message backend."""

from .datetime_utils import utc_now, ensure_utc
from .email_service import EmailDispatchResult, SmtpVerificationEmailSender

__all__ = [
    "utc_now",
    "ensure_utc",
    "EmailDispatchResult",
    "SmtpVerificationEmailSender",
]
