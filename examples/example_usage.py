"""Example: drive the attendance service directly (no Flask).

Shows the week window and today's board for the configured store. Set
API_BASE_URL and HR_API_TOKEN (or STORE_BACKEND=mysql) before running.
"""

import importlib
import os

from dotenv import load_dotenv

from config import get_settings_module

from attendance_engine.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        store_backend=settings.STORE_BACKEND,
        api_base_url=settings.API_BASE_URL,
        db_config=settings.DB_CONFIG,
    )
    service = container.attendance_service(os.getenv("HR_API_TOKEN"))

    view = service.load_week(-1)
    print(f"Last week: {view.label} ({len(view.records)} records)")
    for row in service.get_today_ui():
        print(f"{row['name']:<20} {row['status']:<8} {row['working_hours']:>8}  [{row['action']}]")


if __name__ == "__main__":
    main()
