"""
main.py

Flask backend serving time-limited signed download links.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors

Notes:
  - Configuration comes from SECDOWNLOAD_* environment variables or the
    JSON file named by SECDOWNLOAD_CONFIG_FILE
  - API v1 endpoints available at /api/v1/ with Swagger docs at /api/v1/docs
  - Every other GET path is treated as a signed download URL
"""

import logging
import os

from app_factory import create_app

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    app.run(host=host, port=port, debug=debug)
