"""Monthly compliance check.

Evaluates every member against the calendar month that just ended and
persists the resulting block state. Meant to run from cron on day 1:

    0 3 1 * * cd /srv/gym && APP_ENV=production python scripts/run_compliance_check.py
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.gym_attendance.gym_attendance.compliance.period import resolve_period
from src.gym_attendance.gym_attendance.container import build_container
from src.gym_attendance.gym_attendance.core.exceptions import ValidationError
from src.gym_attendance.gym_attendance.main import configure_logging


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the monthly attendance compliance check.")
    parser.add_argument(
        "--period",
        help="Evaluate a specific month (YYYY-MM) instead of the previous one.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    period = None
    if args.period:
        try:
            year, month = (int(part) for part in args.period.split("-", 1))
            period = resolve_period(year, month)
        except (ValueError, ValidationError):
            raise SystemExit(f"Invalid --period {args.period!r}, expected YYYY-MM")

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        qr_rotation_seconds=int(getattr(settings, "QR_ROTATION_SECONDS", 30)),
    )
    result = container.compliance_service.run_monthly_check(period=period)

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 1 if result.errors else 0


if __name__ == "__main__":
    sys.exit(main())
