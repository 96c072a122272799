from __future__ import annotations

import smtplib
from dataclasses import dataclass
from datetime import datetime, timezone
from email.message import EmailMessage
from typing import Optional

from loguru import logger

from order_desk.config import SmtpConfig


class EscalationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Escalation:
    reason: str
    order_number: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    summary: Optional[str] = None


def _one_line(value: str) -> str:
    return " ".join(value.split())


def build_escalation_email(escalation: Escalation, cfg: SmtpConfig) -> EmailMessage:
    # Header values must not contain line breaks
    subject = f"[Escalation] {_one_line(escalation.reason)}"
    if escalation.order_number:
        subject += f" (order {_one_line(escalation.order_number)})"

    lines = [
        "A customer conversation was escalated by the voice assistant.",
        "",
        f"Reason: {escalation.reason}",
        f"Order: {escalation.order_number or 'n/a'}",
        f"Customer: {escalation.customer_name or 'n/a'}",
        f"Email: {escalation.customer_email or 'n/a'}",
        f"Phone: {escalation.customer_phone or 'n/a'}",
        f"Escalated at: {datetime.now(timezone.utc).isoformat()}",
    ]
    if escalation.summary:
        lines += ["", "Conversation summary:", escalation.summary]

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = cfg.sender
    msg["To"] = cfg.support_address
    if escalation.customer_email:
        msg["Reply-To"] = _one_line(escalation.customer_email)
    msg.set_content("\n".join(lines))
    return msg


class EscalationMailer:
    def __init__(self, config: SmtpConfig):
        self.config = config

    def send(self, escalation: Escalation) -> None:
        cfg = self.config
        if not cfg.is_configured:
            raise EscalationError("SMTP_HOST/ESCALATION_FROM/ESCALATION_TO are not configured")

        try:
            msg = build_escalation_email(escalation, cfg)
            with smtplib.SMTP(cfg.host, cfg.port, timeout=15) as smtp:
                if cfg.use_tls:
                    smtp.starttls()
                if cfg.username:
                    smtp.login(cfg.username, cfg.password)
                smtp.send_message(msg)
        except ValueError as e:
            raise EscalationError(f"Could not build escalation email: {e}") from e
        except (smtplib.SMTPException, OSError) as e:
            raise EscalationError(f"Failed to send escalation email: {e}") from e

        logger.info("Escalation email sent to {} (order={})", cfg.support_address, escalation.order_number)
