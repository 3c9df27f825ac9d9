import asyncio
import logging
from email.message import EmailMessage

import aiosmtplib

from ..core.config import settings

logger = logging.getLogger(__name__)


async def _send_async(msg: EmailMessage) -> None:
    await aiosmtplib.send(
        msg,
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USERNAME or None,
        password=settings.SMTP_PASSWORD or None,
        start_tls=bool(settings.SMTP_USERNAME),
    )


def send_email(recipient: str, subject: str, html_body: str) -> bool:
    """Send an HTML email via SMTP; failures are logged, never raised."""
    if not settings.EMAIL_ENABLED:
        logger.info("Email disabled; skipped '%s' to %s", subject, recipient)
        return False
    if not recipient:
        logger.warning("No recipient for '%s'", subject)
        return False
    msg = EmailMessage()
    msg["From"] = settings.SMTP_FROM
    msg["To"] = recipient
    msg["Subject"] = subject
    msg.set_content("This message requires an HTML capable mail client.")
    msg.add_alternative(html_body, subtype="html")
    try:
        asyncio.run(_send_async(msg))
        logger.info("Sent email to %s", recipient)
        return True
    except Exception as exc:  # pragma: no cover - network issues
        logger.error("Failed to send email to %s: %s", recipient, exc)
        return False
