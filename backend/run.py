#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: flask --app backend.run run --port 5000 --debug

from __future__ import annotations

import logging

from backend.app import create_app
from backend.settings import Settings

settings = Settings.from_env()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    app.run(port=settings.port, debug=settings.debug)
