from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Sequence

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    success: bool
    message: str


def _smtp_password() -> str | None:
    if not settings.smtp_password:
        return None
    # Gmail app passwords are often copied with spaces every 4 chars.
    return settings.smtp_password.replace(" ", "")


def smtp_missing_settings() -> list[str]:
    missing: list[str] = []
    if not settings.smtp_host:
        missing.append("SMTP_HOST")
    if not settings.smtp_user:
        missing.append("SMTP_USER")
    if not _smtp_password():
        missing.append("SMTP_PASSWORD")
    return missing


def _smtp_login(server: smtplib.SMTP) -> None:
    server.login(settings.smtp_user or "", _smtp_password() or "")


def _send_via_smtp_with(host: str, port: int, use_tls: bool, msg: EmailMessage, context: ssl.SSLContext) -> None:
    if use_tls:
        with smtplib.SMTP(host, port, timeout=settings.smtp_timeout_s) as server:
            server.starttls(context=context)
            _smtp_login(server)
            server.send_message(msg)
        return

    with smtplib.SMTP_SSL(host, port, context=context, timeout=settings.smtp_timeout_s) as server:
        _smtp_login(server)
        server.send_message(msg)


def build_html_message(subject: str, html_body: str, recipients: Sequence[str]) -> EmailMessage:
    sender = settings.smtp_from or settings.smtp_user or ""
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = ", ".join(recipients)
    msg.set_content("This assessment report requires an HTML-capable email client.")
    msg.add_alternative(html_body, subtype="html")
    return msg


def send_html_email(subject: str, html_body: str, recipients: Sequence[str] | None = None) -> DeliveryResult:
    to = [item for item in (recipients if recipients is not None else settings.hr_recipients) if item]
    missing = smtp_missing_settings()
    if missing:
        logger.error("Assessment email is not configured; missing %s.", ", ".join(missing))
        return DeliveryResult(False, f"Email delivery is not configured (missing {', '.join(missing)}).")
    if not to:
        logger.error("Assessment email has no recipients; set HR_RECIPIENTS.")
        return DeliveryResult(False, "Email delivery has no recipients configured.")

    msg = build_html_message(subject, html_body, to)
    context = ssl.create_default_context()
    primary_mode = "STARTTLS" if settings.smtp_use_tls else "SSL"
    try:
        _send_via_smtp_with(
            host=settings.smtp_host or "",
            port=settings.smtp_port,
            use_tls=settings.smtp_use_tls,
            msg=msg,
            context=context,
        )
        logger.info("assessment_email_sent recipients=%s mode=%s", len(to), primary_mode)
        return DeliveryResult(True, "Assessment submitted and emailed successfully")
    except Exception as exc:  # noqa: BLE001 - fallback mode is attempted below
        logger.exception(
            "Assessment email via SMTP failed (host=%s port=%s mode=%s): %s",
            settings.smtp_host,
            settings.smtp_port,
            primary_mode,
            exc,
        )
        primary_error = str(exc)

    if not settings.smtp_fallback_ssl:
        return DeliveryResult(False, f"Failed to send assessment email: {primary_error}")

    fallback_host = settings.smtp_host or ""
    fallback_port = 465 if settings.smtp_use_tls else 587
    fallback_tls = not settings.smtp_use_tls
    fallback_mode = "STARTTLS" if fallback_tls else "SSL"
    try:
        _send_via_smtp_with(
            host=fallback_host,
            port=fallback_port,
            use_tls=fallback_tls,
            msg=msg,
            context=context,
        )
        logger.info(
            "Assessment email sent with SMTP fallback (host=%s port=%s mode=%s).",
            fallback_host,
            fallback_port,
            fallback_mode,
        )
        return DeliveryResult(True, "Assessment submitted and emailed successfully")
    except Exception as exc:  # noqa: BLE001 - reported to the caller as a failed delivery
        logger.exception(
            "Assessment email SMTP fallback failed (host=%s port=%s mode=%s): %s",
            fallback_host,
            fallback_port,
            fallback_mode,
            exc,
        )
        return DeliveryResult(False, f"Failed to send assessment email: {exc}")
