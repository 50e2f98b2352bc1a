"""Example: use the service layer directly (no Flask).

Previews one nurse's salary for a month without saving it.
"""

import importlib
import json

from config import get_settings_module

from src.nurse_payroll.nurse_payroll.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        reference_timezone=getattr(settings, "REFERENCE_TIMEZONE", "Asia/Tokyo"),
    )
    calc = container.salary_calculation_service.calculate("N001", "2025-05")
    print(json.dumps(calc.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
