"""Run the daily tasks once: content of the day, limit reset, premium expiry.

For hosts that prefer an external cron over the in-process scheduler.

Usage:
    bin/run-daily-tasks.py
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from curio_app.api.deps import build_services
from curio_app.config import AppConfig
from curio_app.db.connection import init_db


def main():
    config = AppConfig.from_yaml()
    logging.basicConfig(
        level=getattr(logging, config.server.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    db = init_db(config)
    services = build_services(config, db)

    result = services.daily.run_daily_tasks()
    print(json.dumps(result, indent=2))
    sys.exit(0 if result.get("success") else 1)


if __name__ == "__main__":
    main()
