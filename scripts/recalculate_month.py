"""Recalculate and save the salary of every active nurse for one month.

Usage: python scripts/recalculate_month.py 2025-05
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.nurse_payroll.nurse_payroll.container import build_container
from src.nurse_payroll.nurse_payroll.core.exceptions import DomainError


def main(argv: list[str]) -> int:
    if len(argv) != 1:
        print("usage: recalculate_month.py YYYY-MM", file=sys.stderr)
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        reference_timezone=getattr(settings, "REFERENCE_TIMEZONE", "Asia/Tokyo"),
        parallel_aggregation=bool(getattr(settings, "PARALLEL_AGGREGATION", True)),
    )
    try:
        result = container.salary_calculation_service.calculate_and_save_month(argv[0])
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for record in result.saved:
        print(f"{record.nurse_id}\t{record.year_month}\t{record.total_amount}")
    for nurse_id, message in result.failed.items():
        print(f"FAILED: {nurse_id}: {message}", file=sys.stderr)
    print(f"OK: {len(result.saved)} salaries saved for {result.year_month}")
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
