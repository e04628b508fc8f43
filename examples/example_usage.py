"""Example: drive the overtime lifecycle directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import importlib

from config import get_settings_module
from overtime_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        technicians=settings.TECHNICIANS,
        bulk_delete_code=settings.BULK_DELETE_CODE,
        display_timezone=settings.DISPLAY_TIMEZONE,
    )
    lifecycle = container.new_lifecycle()
    records = lifecycle.select_technician(settings.TECHNICIANS[0])
    print(f"{len(records)} records, total {lifecycle.total}")


if __name__ == "__main__":
    main()
