# tests/test_notifications.py

from __future__ import annotations

import logging
from types import SimpleNamespace

from utils import notifications
from utils.notifications import ACCOUNT_DELETED, SIGNUP, Notifier, SmtpMailer, init_notifier, welcome_email_hook


def test_dispatch_runs_hooks_inline_when_sync():
    calls = []
    notifier = Notifier(logging.getLogger("test"), run_async=False)
    notifier.register(SIGNUP, lambda email, name: calls.append((email, name)))

    notifier.dispatch(SIGNUP, "roy@example.com", "Roy")

    assert calls == [("roy@example.com", "Roy")]


def test_dispatch_swallows_and_logs_hook_failures(caplog):
    calls = []

    def broken(email, name):
        raise RuntimeError("provider is down")

    notifier = Notifier(logging.getLogger("test.notify"), run_async=False)
    notifier.register(SIGNUP, broken)
    notifier.register(SIGNUP, lambda email, name: calls.append(email))

    with caplog.at_level(logging.ERROR, logger="test.notify"):
        notifier.dispatch(SIGNUP, "roy@example.com", "Roy")

    assert calls == ["roy@example.com"]
    assert "provider is down" in caplog.text


def test_dispatch_of_unknown_event_is_noop():
    notifier = Notifier(logging.getLogger("test"), run_async=False)
    notifier.dispatch("nothing", "roy@example.com", "Roy")


def test_async_dispatch_completes_in_background():
    calls = []
    notifier = Notifier(logging.getLogger("test"), run_async=True)
    notifier.register(SIGNUP, lambda email, name: calls.append(name))

    notifier.dispatch(SIGNUP, "roy@example.com", "Roy")
    notifier.shutdown()

    assert calls == ["Roy"]
    assert notifier.is_async is False


def test_unconfigured_mailer_reports_not_delivered():
    mailer = SmtpMailer(host="", port=587, sender="")
    assert mailer.configured is False
    assert welcome_email_hook(mailer)("roy@example.com", "Roy") is False


def test_mailer_from_config():
    mailer = SmtpMailer.from_config(
        {"SMTP_HOST": "smtp.example.com", "SMTP_PORT": 2525, "SMTP_FROM": "noreply@example.com", "SMTP_PASSWORD": "key"}
    )
    assert mailer.configured
    assert mailer.port == 2525
    assert mailer.password == "key"


def _fake_app(**config):
    return SimpleNamespace(logger=logging.getLogger("test.app"), config=config, extensions={})


def test_init_notifier_registers_shutdown_at_exit(monkeypatch):
    registered = []
    monkeypatch.setattr(notifications, "atexit", SimpleNamespace(register=registered.append))
    app = _fake_app(NOTIFICATIONS_ASYNC=True, NOTIFICATIONS_ENABLED=True, SMTP_HOST="")

    notifier = init_notifier(app)

    assert app.extensions["notifier"] is notifier
    assert registered == [notifier.shutdown]
    assert len(notifier.hooks(SIGNUP)) == 1
    assert len(notifier.hooks(ACCOUNT_DELETED)) == 1
    notifier.shutdown()


def test_init_notifier_sync_mode_starts_no_pool(monkeypatch):
    registered = []
    monkeypatch.setattr(notifications, "atexit", SimpleNamespace(register=registered.append))

    notifier = init_notifier(_fake_app(NOTIFICATIONS_ASYNC=False, NOTIFICATIONS_ENABLED=False))

    assert notifier.is_async is False
    assert registered == []
    assert notifier.hooks(SIGNUP) == []


def test_dispatch_after_shutdown_runs_inline():
    calls = []
    notifier = Notifier(logging.getLogger("test"), run_async=True)
    notifier.register(SIGNUP, lambda email, name: calls.append(email))
    notifier.shutdown()

    notifier.dispatch(SIGNUP, "roy@example.com", "Roy")

    assert calls == ["roy@example.com"]
