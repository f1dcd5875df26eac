# cr_core/mail/tests/test_mail_service.py
from smtplib import SMTPException
from unittest import mock

from django.core import mail

from cr_core.mail.services import MailService


def test_send_text_and_html():
    ok = MailService(default_from="noreply@clinic.test").send_mail(
        to="a@example.com",
        subject="Hello",
        html="<p>Hi <b>there</b></p>",
        cc=["b@example.com"],
    )
    assert ok is True
    assert len(mail.outbox) == 1

    msg = mail.outbox[0]
    assert msg.from_email == "noreply@clinic.test"
    assert msg.to == ["a@example.com"]
    assert msg.cc == ["b@example.com"]
    assert msg.body == "Hi there"
    assert msg.alternatives[0][1] == "text/html"


def test_no_recipients_is_skipped():
    assert MailService().send_mail(to=[], subject="Nobody") is False
    assert mail.outbox == []


def test_transport_failure_is_logged_not_raised(caplog):
    with mock.patch("django.core.mail.EmailMultiAlternatives.send", side_effect=SMTPException("down")):
        ok = MailService().send_mail(to="a@example.com", subject="Hello", text="x")
    assert ok is False
    assert "Failed to send mail" in caplog.text
