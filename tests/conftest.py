from datetime import datetime, timedelta
from typing import List, Tuple

import pytest

from library_loans import (
    Book,
    LoanEventNotifier,
    LoanLedger,
    LoanManager,
    NotificationChannel,
    Notifier,
    StandardFine,
    User,
)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingNotifier(Notifier):
    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.sent: List[Tuple[str, str]] = []

    def send(self, message: str, recipient: str) -> bool:
        self.sent.append((message, recipient))
        return self.accept

    def get_channel(self) -> NotificationChannel:
        return NotificationChannel.EMAIL


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 10, 30))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def ledger() -> LoanLedger:
    return LoanLedger()


@pytest.fixture
def manager(clock: FakeClock, notifier: RecordingNotifier, ledger: LoanLedger) -> LoanManager:
    events = LoanEventNotifier()
    events.attach(ledger)
    return LoanManager(StandardFine(), notifier, clock=clock, events=events)


@pytest.fixture
def book() -> Book:
    return Book("1984", "George Orwell", "978-0-452-28423-4")


@pytest.fixture
def user() -> User:
    return User("Ana Garcia", "U001")
