# accounting/management/commands/verify_ledger.py

from __future__ import annotations

from datetime import datetime

from django.core.management.base import BaseCommand

from accounting.services.exceptions import ImbalanceDetected
from accounting.services.financial_statement_service import validate_financials


def _parse_date(s: str | None):
    """
    Parse YYYY-MM-DD into a date, or None.
    """
    if not s:
        return None
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


class Command(BaseCommand):
    help = (
        "Verify ledger integrity: trial balance, balance sheet equation and "
        "running balances vs journal lines. Exits non-zero on any problem."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--as-of",
            dest="as_of",
            help="Cutoff date YYYY-MM-DD (optional, defaults to every posted entry)",
        )

    def handle(self, *args, **options):
        as_of = _parse_date(options.get("as_of"))

        if options.get("as_of") and not as_of:
            self.stderr.write(self.style.ERROR("Invalid --as-of date. Use YYYY-MM-DD"))
            return self._exit(True)

        try:
            summary = validate_financials(as_of=as_of)
        except ImbalanceDetected as exc:
            self.stderr.write(self.style.ERROR(f"❌ LEDGER CHECK FAILED: {exc}"))
            return self._exit(True)

        self.stdout.write(
            f"Trial balance as of {summary['as_of'] or 'latest entry'}: "
            f"debits={summary['total_debit']:.2f} credits={summary['total_credit']:.2f}"
        )
        self.stdout.write(
            f"Balance sheet: assets={summary['total_assets']:.2f} "
            f"liabilities+equity={summary['total_liabilities_and_equity']:.2f}"
        )
        self.stdout.write(self.style.SUCCESS("✅ LEDGER CHECK PASSED"))
        return None

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None
