"""
Library Loan Simulator
======================

Core Design: In-memory simulator for lending books to users, charging fines
for late returns and notifying borrowers.

Design Patterns & Strategies Used:
1. Strategy Pattern - Fine calculation (Standard, Student, VIP)
2. Strategy Pattern - Notification channels (Email, SMS)
3. Dependency Inversion - LoanManager only knows the abstract strategies
4. Observer Pattern - Loan outcomes published as events
5. Factory Pattern - Create fine calculators and notifiers
6. Interface Segregation - Lendable and Renewable capabilities

Features:
- Issue and return loans (one open loan per book)
- 14 day loan period, configurable
- Whole-day late fines per membership type
- Loan renewal while not overdue
- Overdue loan tracking
- Best-effort borrower notifications
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional, Tuple
from datetime import datetime, timedelta
from dataclasses import dataclass


logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
DEFAULT_LOAN_PERIOD_DAYS = 14


class Membership(Enum):
    STANDARD = "STANDARD"
    STUDENT = "STUDENT"
    VIP = "VIP"


class NotificationChannel(Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"


class LoanEventType(Enum):
    LOAN_REJECTED_UNAVAILABLE = "LOAN_REJECTED_UNAVAILABLE"
    LOAN_ISSUED = "LOAN_ISSUED"
    ALREADY_RETURNED = "ALREADY_RETURNED"
    RETURNED_LATE = "RETURNED_LATE"
    RETURNED_ON_TIME = "RETURNED_ON_TIME"
    LOAN_RENEWED = "LOAN_RENEWED"
    RENEWAL_REJECTED = "RENEWAL_REJECTED"


# ==================== ENTITIES ====================

@dataclass
class Book:
    """Catalog entry. Only LoanManager flips ``available``."""
    title: str
    author: str
    isbn: str
    available: bool = True


@dataclass(frozen=True)
class User:
    """Borrower"""
    name: str
    user_id: str


@dataclass(eq=False)
class Loan:
    """Loan record linking a book and a user.

    ``returned`` moves from False to True once and never back. Loans compare
    by identity, so a book lent twice yields two distinct records.
    """
    book: Book
    user: User
    loan_date: datetime
    due_date: datetime
    returned: bool = False

    def is_overdue(self, now: datetime) -> bool:
        """True while the loan is open and past its due date"""
        return not self.returned and now > self.due_date

    def days_late(self, now: datetime) -> int:
        """Whole days past the due date, truncated, never negative"""
        return max(0, (now - self.due_date) // ONE_DAY)


# ==================== STRATEGY PATTERN ====================
# Fine calculation per membership type

def _require_non_negative(days_late: int):
    if days_late < 0:
        raise ValueError(f"days_late must be >= 0, got {days_late}")


class FineCalculator(ABC):
    """Fine calculation strategy"""

    @abstractmethod
    def calculate(self, days_late: int) -> float:
        pass


class StandardFine(FineCalculator):
    """Regular members pay a flat rate per day late"""

    def __init__(self, daily_rate: float = 10):
        self.daily_rate = daily_rate

    def calculate(self, days_late: int) -> float:
        _require_non_negative(days_late)
        return days_late * self.daily_rate


class StudentFine(FineCalculator):
    """Students pay half the standard rate"""

    def __init__(self, daily_rate: float = 5):
        self.daily_rate = daily_rate

    def calculate(self, days_late: int) -> float:
        _require_non_negative(days_late)
        return days_late * self.daily_rate


class VIPFine(FineCalculator):
    """VIP members are never fined"""

    def calculate(self, days_late: int) -> float:
        _require_non_negative(days_late)
        return 0


# ==================== STRATEGY PATTERN ====================
# Notification channels. Every sender returns True when it accepts the
# message; acceptance is not a delivery guarantee.

class Notifier(ABC):
    """Notification sender interface"""

    @abstractmethod
    def send(self, message: str, recipient: str) -> bool:
        pass

    @abstractmethod
    def get_channel(self) -> NotificationChannel:
        pass


class EmailNotifier(Notifier):
    """Email notification sender"""

    def send(self, message: str, recipient: str) -> bool:
        print(f"[Email] To: {recipient}")
        print(f"        Body: {message}")
        return True

    def get_channel(self) -> NotificationChannel:
        return NotificationChannel.EMAIL


class SMSNotifier(Notifier):
    """SMS notification sender"""

    def send(self, message: str, recipient: str) -> bool:
        print(f"[SMS] To: {recipient}")
        print(f"      Message: {message}")
        return True

    def get_channel(self) -> NotificationChannel:
        return NotificationChannel.SMS


# ==================== FACTORY PATTERN ====================

class FineCalculatorFactory:
    """Factory for creating fine calculators"""

    @staticmethod
    def create(membership: Membership) -> FineCalculator:
        if membership == Membership.STANDARD:
            return StandardFine()
        elif membership == Membership.STUDENT:
            return StudentFine()
        elif membership == Membership.VIP:
            return VIPFine()
        else:
            raise ValueError(f"Unknown membership: {membership}")


class NotifierFactory:
    """Factory for creating notifiers"""

    @staticmethod
    def create(channel: NotificationChannel) -> Notifier:
        if channel == NotificationChannel.EMAIL:
            return EmailNotifier()
        elif channel == NotificationChannel.SMS:
            return SMSNotifier()
        else:
            raise ValueError(f"Unknown channel: {channel}")


# ==================== OBSERVER PATTERN ====================
# Loan outcomes are published to observers instead of being returned

@dataclass
class LoanEvent:
    """Outcome of a LoanManager operation"""
    event_type: LoanEventType
    book: Book
    user: User
    loan: Optional[Loan] = None
    days_late: int = 0
    fine: Optional[float] = None

    def describe(self) -> str:
        title = self.book.title
        if self.event_type == LoanEventType.LOAN_REJECTED_UNAVAILABLE:
            return f"Book '{title}' is not available"
        if self.event_type == LoanEventType.LOAN_ISSUED:
            return f"Loan issued: '{title}' for {self.user.name}"
        if self.event_type == LoanEventType.ALREADY_RETURNED:
            return f"Book '{title}' was already returned"
        if self.event_type == LoanEventType.RETURNED_LATE:
            return (f"'{title}' returned by {self.user.name}, "
                    f"{self.days_late} day(s) late. Fine: ${self.fine}")
        if self.event_type == LoanEventType.RETURNED_ON_TIME:
            return f"'{title}' returned on time by {self.user.name}"
        if self.event_type == LoanEventType.LOAN_RENEWED:
            return (f"Loan renewed: '{title}' for {self.user.name}, "
                    f"due {self.loan.due_date.date().isoformat()}")
        return f"Loan of '{title}' cannot be renewed"


class LoanObserver(ABC):
    """Observer interface for loan events"""

    @abstractmethod
    def update(self, event: LoanEvent):
        pass


class LoanEventNotifier:
    """Subject - keeps observers and forwards every loan event to them"""

    def __init__(self):
        self._observers: List[LoanObserver] = []

    def attach(self, observer: LoanObserver):
        """Attach an observer"""
        if observer not in self._observers:
            self._observers.append(observer)

    def detach(self, observer: LoanObserver):
        """Detach an observer"""
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, event: LoanEvent):
        """Notify all observers"""
        for observer in self._observers:
            observer.update(event)


class LoanLedger(LoanObserver):
    """Concrete observer - keeps the history of outcomes and fines"""

    def __init__(self):
        self.events: List[LoanEvent] = []

    def update(self, event: LoanEvent):
        self.events.append(event)

    def of_type(self, event_type: LoanEventType) -> List[LoanEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def total_fines(self) -> float:
        return sum(e.fine for e in self.of_type(LoanEventType.RETURNED_LATE))


# ==================== INTERFACE SEGREGATION ====================
# Callers depend only on the capability they use

class Lendable(ABC):
    """Lend and take back books"""

    @abstractmethod
    def issue_loan(self, book: Book, user: User) -> Optional[Loan]:
        pass

    @abstractmethod
    def return_loan(self, loan: Loan) -> None:
        pass


class Renewable(ABC):
    """Extend an open loan"""

    @abstractmethod
    def renew_loan(self, loan: Loan) -> bool:
        pass


# ==================== DEPENDENCY INVERSION ====================

class LoanManager(Lendable, Renewable):
    """Issues, returns and renews loans.

    Fine policy and notification channel are injected; the manager never
    refers to a concrete variant. ``clock`` returns the current time and can
    be replaced to simulate the passage of days.
    """

    def __init__(self, calculator: FineCalculator, notifier: Notifier,
                 loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS,
                 clock: Callable[[], datetime] = datetime.now,
                 events: Optional[LoanEventNotifier] = None):
        if loan_period_days <= 0:
            raise ValueError(f"loan_period_days must be positive, got {loan_period_days}")
        self.calculator = calculator
        self.notifier = notifier
        self.loan_period = timedelta(days=loan_period_days)
        self.clock = clock
        self.events = events if events is not None else LoanEventNotifier()
        self._loans: List[Loan] = []

    @property
    def loans(self) -> Tuple[Loan, ...]:
        """Every loan issued by this manager, oldest first"""
        return tuple(self._loans)

    def issue_loan(self, book: Book, user: User) -> Optional[Loan]:
        """Lend ``book`` to ``user``; None when the book is already out"""
        if not book.available:
            self._publish(LoanEvent(LoanEventType.LOAN_REJECTED_UNAVAILABLE, book, user),
                          logging.WARNING)
            return None

        now = self.clock()
        book.available = False
        loan = Loan(book=book, user=user, loan_date=now, due_date=now + self.loan_period)
        self._loans.append(loan)

        self._send(user, f"You borrowed '{book.title}'. "
                         f"Due date: {loan.due_date.date().isoformat()}")
        self._publish(LoanEvent(LoanEventType.LOAN_ISSUED, book, user, loan=loan))
        return loan

    def return_loan(self, loan: Loan) -> None:
        """Close ``loan``, charging a fine if it is past due"""
        if loan.returned:
            self._publish(LoanEvent(LoanEventType.ALREADY_RETURNED, loan.book, loan.user,
                                    loan=loan), logging.WARNING)
            return

        now = self.clock()
        if now > loan.due_date:
            days_late = loan.days_late(now)
            event = LoanEvent(LoanEventType.RETURNED_LATE, loan.book, loan.user, loan=loan,
                              days_late=days_late,
                              fine=self.calculator.calculate(days_late))
        else:
            event = LoanEvent(LoanEventType.RETURNED_ON_TIME, loan.book, loan.user, loan=loan)

        loan.returned = True
        loan.book.available = True
        self._publish(event)

    def renew_loan(self, loan: Loan) -> bool:
        """Push the due date back one loan period; overdue loans can't renew"""
        if loan.returned or loan.is_overdue(self.clock()):
            self._publish(LoanEvent(LoanEventType.RENEWAL_REJECTED, loan.book, loan.user,
                                    loan=loan), logging.WARNING)
            return False

        loan.due_date += self.loan_period
        self._send(loan.user, f"Your loan of '{loan.book.title}' was renewed. "
                              f"New due date: {loan.due_date.date().isoformat()}")
        self._publish(LoanEvent(LoanEventType.LOAN_RENEWED, loan.book, loan.user, loan=loan))
        return True

    def overdue_loans(self) -> List[Loan]:
        now = self.clock()
        return [loan for loan in self._loans if loan.is_overdue(now)]

    def _send(self, user: User, message: str):
        # A refused notification never undoes the loan
        if not self.notifier.send(message, user.name):
            logger.warning("%s notification to %s was not accepted",
                           self.notifier.get_channel().value, user.name)

    def _publish(self, event: LoanEvent, level: int = logging.INFO):
        logger.log(level, event.describe())
        self.events.notify(event)


# ==================== DEMONSTRATION ====================

def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    print("=" * 60)
    print("LIBRARY LOAN SIMULATOR DEMONSTRATION")
    print("=" * 60)
    print()

    book1 = Book("1984", "George Orwell", "978-0-452-28423-4")
    book2 = Book("One Hundred Years of Solitude", "Gabriel Garcia Marquez",
                 "978-84-376-0494-7")
    user1 = User("Ana Garcia", "U001")
    user2 = User("Carlos Lopez", "U002")

    ledger = LoanLedger()
    events = LoanEventNotifier()
    events.attach(ledger)

    regular = LoanManager(FineCalculatorFactory.create(Membership.STANDARD),
                          NotifierFactory.create(NotificationChannel.EMAIL),
                          events=events)
    student = LoanManager(FineCalculatorFactory.create(Membership.STUDENT),
                          NotifierFactory.create(NotificationChannel.SMS),
                          events=events)

    print("1. Issuing loans:")
    loan1 = regular.issue_loan(book1, user1)
    loan2 = student.issue_loan(book2, user2)
    student.issue_loan(book1, user2)
    print()

    print("2. Late return (due three days ago):")
    if loan1:
        loan1.due_date = datetime.now() - timedelta(days=3)
        regular.return_loan(loan1)
    print()

    print("3. On-time return:")
    if loan2:
        student.return_loan(loan2)
        student.return_loan(loan2)
    print()

    print(f"Total fines charged: ${ledger.total_fines()}")
    print()
    print("=" * 60)
    print("DESIGN PATTERNS & STRATEGIES:")
    print("=" * 60)
    print("1. Strategy Pattern - Fine policies (Standard, Student, VIP)")
    print("2. Strategy Pattern - Notification channels (Email, SMS)")
    print("3. Dependency Inversion - LoanManager depends on abstractions")
    print("4. Observer Pattern - Loan outcome events")
    print("5. Factory Pattern - Create calculators and notifiers")
    print("=" * 60)


if __name__ == "__main__":
    main()
