import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Mapping, Optional, TextIO

from models import ClientAccount, Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

ACCOUNT_FIELDS = ["client", "available", "held", "total", "locked"]


class TransactionParseError(ValueError):
    """Raised when the input file holds a record that cannot be read."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def read_transactions(filepath: str) -> List[Transaction]:
    """
    Read every record from a CSV file with a type,client,tx,amount header.
    The whole file is parsed before anything is returned, so a bad row
    aborts the run without any transaction having been applied.
    """
    transactions = []
    with open(filepath, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        try:
            for row in reader:
                transactions.append(parse_row(row, reader.line_num))
        except UnicodeDecodeError as e:
            raise TransactionParseError(f"input is not valid UTF-8: {e.reason}") from e
        except csv.Error as e:
            raise TransactionParseError(str(e), reader.line_num) from e

    logger.info(f"Read {len(transactions)} transactions from {filepath}")
    return transactions


def parse_row(row: Mapping[Optional[str], Optional[str]], line_number: Optional[int] = None) -> Transaction:
    """Parse CSV row into Transaction."""
    normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

    try:
        raw_type = normalized["type"]
        client_field = normalized["client"]
        transaction_field = normalized["tx"]
    except KeyError as e:
        raise TransactionParseError(f"missing field {e}", line_number) from e

    client_id = _parse_id(client_field, "client", MAX_CLIENT_ID, line_number)
    transaction_id = _parse_id(transaction_field, "tx", MAX_TRANSACTION_ID, line_number)
    transaction_type = TransactionType.from_string(raw_type)

    amount = None
    amount_str = normalized.get("amount", "")
    if amount_str:
        amount = _parse_amount(amount_str, line_number)

    if amount is None and transaction_type in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
        raise TransactionParseError(f"{raw_type} tx {transaction_id} has no amount", line_number)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
        raw_type=raw_type,
    )


def _parse_id(value: str, name: str, maximum: int, line_number: Optional[int]) -> int:
    # int() also takes underscores and non-ASCII digits
    if not (value.isascii() and value.removeprefix("+").isdigit()):
        raise TransactionParseError(f"invalid {name} id {value!r}", line_number)
    parsed = int(value)
    if not 0 <= parsed <= maximum:
        raise TransactionParseError(f"{name} id {parsed} out of range", line_number)
    return parsed


def _parse_amount(value: str, line_number: Optional[int]) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as e:
        raise TransactionParseError(f"invalid amount {value!r}", line_number) from e
    if not amount.is_finite() or amount < 0:
        raise TransactionParseError(f"invalid amount {value!r}", line_number)
    return amount


def format_decimal(value: Decimal) -> str:
    """Format decimal keeping every significant digit, removing trailing zeros."""
    normalized = value.normalize()
    return f"{normalized:f}"


def write_accounts(accounts: Dict[int, ClientAccount], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(ACCOUNT_FIELDS)
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        writer.writerow([
            client_id,
            format_decimal(account.available),
            format_decimal(account.held),
            format_decimal(account.total),
            str(account.locked).lower(),
        ])


def write_diagnostics(diagnostics: Iterable[str], stream: TextIO) -> None:
    for diagnostic in diagnostics:
        print(diagnostic, file=stream)
