"""Example: drive the service layer without Flask.

Controllers are a thin layer; the use cases live in the services.
"""

import importlib

from config import get_settings_module

from src.conference_system.conference_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, secret_key=settings.SECRET_KEY)
    for row in container.catalog_service.list_schedule():
        print(f"{row.time:%Y-%m-%d %H:%M}  {row.title:<40} {row.admitted_count}/{row.capacity}")
    container.notifier.shutdown()


if __name__ == "__main__":
    main()
