"""BizModelAI application entry point.

Loads `.env`, builds the Flask app through `bizmodel_app.create_app` and
exposes `app` for `flask --app app run` or a WSGI server.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent
if os.getenv("FLASK_SKIP_DOTENV") not in {"1", "true", "True"}:
    load_dotenv(PROJECT_ROOT / ".env")

from bizmodel_app import create_app  # noqa: E402  (import after load_dotenv)

app = create_app()


if __name__ == "__main__":  # pragma: no cover
    app.run(
        debug=app.config.get("DEBUG", False),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
    )
