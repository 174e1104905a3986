from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_string(cls, value: str) -> "TransactionType":
        """Map an input type string to a known type, or UNRECOGNIZED."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNRECOGNIZED


class AccountError(Enum):
    INSUFFICIENT_FUNDS = "Insufficient available funds"
    INSUFFICIENT_HELD = "Insufficient held funds"


class ProcessingResult(Enum):
    SUCCESS = "success"
    REJECTED = "rejected"


@dataclass
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None
    raw_type: Optional[str] = None

    def __post_init__(self):
        if self.raw_type is None:
            self.raw_type = self.transaction_type.value

    def __repr__(self) -> str:
        return f"Transaction({self.raw_type}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    """
    Balance state of a single client.
    Every operation returns None on success or the AccountError that
    rejected it; a rejected operation leaves the account untouched.
    """

    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def deposit(self, amount: Decimal) -> Optional[AccountError]:
        self.available += amount
        return None

    def withdraw(self, amount: Decimal) -> Optional[AccountError]:
        if amount > self.available:
            return AccountError.INSUFFICIENT_FUNDS
        self.available -= amount
        return None

    def dispute(self, amount: Decimal) -> Optional[AccountError]:
        """Move funds from available to held. Fails if they were already spent."""
        if amount > self.available:
            return AccountError.INSUFFICIENT_FUNDS
        self.available -= amount
        self.held += amount
        return None

    def resolve(self, amount: Decimal) -> Optional[AccountError]:
        if amount > self.held:
            return AccountError.INSUFFICIENT_HELD
        self.held -= amount
        self.available += amount
        return None

    def chargeback(self, amount: Decimal) -> Optional[AccountError]:
        """Remove held funds for good and lock the account."""
        if amount > self.held:
            return AccountError.INSUFFICIENT_HELD
        self.held -= amount
        self.locked = True
        return None


@dataclass(frozen=True)
class TransactionOutcome:
    result: ProcessingResult
    diagnostic: Optional[str] = None

    @classmethod
    def success(cls) -> "TransactionOutcome":
        return cls(ProcessingResult.SUCCESS)

    @classmethod
    def rejected(cls, diagnostic: str) -> "TransactionOutcome":
        return cls(ProcessingResult.REJECTED, diagnostic)

    @property
    def is_success(self) -> bool:
        return self.result == ProcessingResult.SUCCESS


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.processed = 0
        self.rejected = 0

    def record_success(self):
        self.processed += 1

    def record_rejection(self):
        self.rejected += 1

    def snapshot(self) -> "ProcessingStats":
        """Copy of the current counters, detached from further updates."""
        stats = ProcessingStats()
        stats.processed = self.processed
        stats.rejected = self.rejected
        return stats

    @property
    def total(self) -> int:
        return self.processed + self.rejected


@dataclass
class ProcessingReport:
    accounts: Dict[int, ClientAccount]
    diagnostics: List[str] = field(default_factory=list)
    stats: ProcessingStats = field(default_factory=ProcessingStats)
