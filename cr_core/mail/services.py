# cr_core/mail/services.py
from __future__ import annotations

import logging
from smtplib import SMTPException
from typing import Iterable, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


def _as_list(value: str | Iterable[str] | None) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [v for v in value if v]


class MailService:
    """
    Outbound mail. Fire-and-forget: a failed send is logged, never raised,
    so account flows don't fail because SMTP is down.
    """

    def __init__(self, *, default_from: Optional[str] = None, connection=None):
        self.default_from = default_from or getattr(settings, "DEFAULT_FROM_EMAIL", None)
        self.connection = connection

    def send_mail(
        self,
        *,
        to: str | Iterable[str],
        subject: str,
        text: Optional[str] = None,
        html: Optional[str] = None,
        cc: str | Iterable[str] | None = None,
        bcc: str | Iterable[str] | None = None,
        from_email: Optional[str] = None,
    ) -> bool:
        recipients = _as_list(to)
        if not recipients:
            logger.warning("Mail '%s' skipped: no recipients", subject)
            return False

        body = text if text is not None else strip_tags(html or "")
        msg = EmailMultiAlternatives(
            subject=subject,
            body=body,
            from_email=from_email or self.default_from,
            to=recipients,
            cc=_as_list(cc),
            bcc=_as_list(bcc),
            connection=self.connection,
        )
        if html:
            msg.attach_alternative(html, "text/html")

        try:
            msg.send(fail_silently=False)
        except (SMTPException, OSError) as exc:
            logger.error("Failed to send mail '%s' to %s: %s", subject, ", ".join(recipients), exc)
            return False

        logger.info("Mail '%s' sent to %s", subject, ", ".join(recipients))
        return True
