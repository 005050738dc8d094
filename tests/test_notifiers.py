import pytest

from library_loans import (
    EmailNotifier,
    NotificationChannel,
    NotifierFactory,
    SMSNotifier,
)


@pytest.mark.parametrize("notifier", [EmailNotifier(), SMSNotifier()])
@pytest.mark.parametrize("message, recipient", [
    ("You borrowed '1984'. Due date: 2024-03-15", "Ana Garcia"),
    ("", ""),
    ("x" * 500, "+34 600 000 000"),
])
def test_every_notifier_accepts(notifier, message: str, recipient: str) -> None:
    assert notifier.send(message, recipient) is True


def test_email_writes_to_console(capsys) -> None:
    EmailNotifier().send("hello", "ana@example.com")
    out = capsys.readouterr().out
    assert "[Email] To: ana@example.com" in out
    assert "hello" in out


def test_sms_writes_to_console(capsys) -> None:
    SMSNotifier().send("hello", "+34600000000")
    out = capsys.readouterr().out
    assert "[SMS] To: +34600000000" in out
    assert "hello" in out


def test_factory_maps_channel() -> None:
    email = NotifierFactory.create(NotificationChannel.EMAIL)
    sms = NotifierFactory.create(NotificationChannel.SMS)
    assert isinstance(email, EmailNotifier)
    assert isinstance(sms, SMSNotifier)
    assert email.get_channel() == NotificationChannel.EMAIL
    assert sms.get_channel() == NotificationChannel.SMS


def test_factory_rejects_unknown_channel() -> None:
    with pytest.raises(ValueError, match="Unknown channel"):
        NotifierFactory.create("PUSH")
