"""Unit tests for NotificationDispatcher and the SMTP mailer."""

import asyncio
from unittest.mock import patch

import pytest

from warden_identity.application.email_templates import (
    PASSWORD_RESET_TEMPLATE,
    WELCOME_SUBJECT,
    WELCOME_TEMPLATE,
)
from warden_identity.application.notifications import NotificationDispatcher
from warden_identity.application.ports import EmailMessage
from warden_identity.infrastructure.email import SMTPMailer
from tests.shared.fixtures.factories import RecordingMailer, make_settings

MESSAGE = EmailMessage(
    to="alice@example.com",
    subject=WELCOME_SUBJECT,
    template=WELCOME_TEMPLATE,
    context={"username": "alice", "email": "alice@example.com"},
)


class TestNotificationDispatcher:
    """Tests for fire-and-forget delivery."""

    @pytest.mark.asyncio
    async def test_dispatch_does_not_wait_for_delivery(self):
        mailer = RecordingMailer()
        dispatcher = NotificationDispatcher(mailer)

        dispatcher.dispatch(MESSAGE)

        assert mailer.sent == []
        assert dispatcher.pending == 1

        await dispatcher.drain()

        assert mailer.sent == [MESSAGE]
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_delivery_failure_is_logged_not_raised(self, caplog):
        dispatcher = NotificationDispatcher(RecordingMailer(fail=True))

        task = dispatcher.dispatch(MESSAGE)
        await dispatcher.drain()

        assert task.exception() is None
        assert "SMTP unavailable" in caplog.text

    @pytest.mark.asyncio
    async def test_dispatch_requires_running_loop_task(self):
        dispatcher = NotificationDispatcher(RecordingMailer())

        task = dispatcher.dispatch(MESSAGE)

        assert isinstance(task, asyncio.Task)
        await dispatcher.drain()


class TestTemplates:
    def test_reset_template_renders_token(self):
        text, html = PASSWORD_RESET_TEMPLATE.render({"username": "alice", "token": "abc123"})

        assert "abc123" in text
        assert "alice" in text
        assert "abc123" in html


class TestSMTPMailer:
    """Tests for SMTPMailer without a real server."""

    @pytest.mark.asyncio
    async def test_disabled_smtp_skips_sending(self):
        mailer = SMTPMailer(make_settings(smtp_enabled=False))

        with patch("smtplib.SMTP") as smtp:
            await mailer.send(MESSAGE)

        smtp.assert_not_called()

    @pytest.mark.asyncio
    async def test_starttls_delivery(self):
        mailer = SMTPMailer(
            make_settings(
                smtp_enabled=True,
                smtp_host="smtp.example.com",
                smtp_user="mailer",
                smtp_password="pw",
                smtp_from_email="noreply@example.com",
            ),
        )

        with patch("smtplib.SMTP") as smtp:
            await mailer.send(MESSAGE)

        server = smtp.return_value.__enter__.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "pw")
        sent = server.send_message.call_args[0][0]
        assert sent["To"] == "alice@example.com"
        assert sent["Subject"] == WELCOME_SUBJECT

    @pytest.mark.asyncio
    async def test_missing_host_raises(self):
        mailer = SMTPMailer(make_settings(smtp_enabled=True, smtp_host=""))

        with pytest.raises(RuntimeError, match="SMTP host not configured"):
            await mailer.send(MESSAGE)
