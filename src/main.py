import sys
import logging

from pydantic import ValidationError

from config import get_settings
from csv_io import TransactionParseError, write_accounts, write_diagnostics
from payments_engine import PaymentsEngine

logger = logging.getLogger(__name__)

USAGE = "Usage: python main.py <input.csv> [show_errors]"


def parse_flag(value: str) -> bool:
    return value.strip().lower() in ("true", "1")


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format=settings.log_format,
        stream=sys.stderr,
    )

    if len(argv) not in (1, 2):
        print(USAGE, file=sys.stderr)
        return 1

    filepath = argv[0]
    show_diagnostics = parse_flag(argv[1]) if len(argv) == 2 else settings.show_diagnostics

    engine = PaymentsEngine(freeze_locked_accounts=settings.freeze_locked_accounts)
    try:
        report = engine.process_file(filepath)
    except (TransactionParseError, OSError) as e:
        logger.debug("Aborting run", exc_info=True)
        print(f"error parsing csv: {e}", file=sys.stderr)
        return 1

    if show_diagnostics:
        write_diagnostics(report.diagnostics, sys.stdout)
    write_accounts(report.accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
