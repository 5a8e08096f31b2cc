"""Serve the stockfolio API with uvicorn. BACKEND_HOST / BACKEND_PORT override the bind address."""
import os

import uvicorn

from stockfolio.config.settings import get_settings
from stockfolio.main import app


def main() -> None:
    host = os.environ.get("BACKEND_HOST", "127.0.0.1")
    port = int(os.environ.get("BACKEND_PORT", "8001"))
    uvicorn.run(app, host=host, port=port, log_level=get_settings().log_level.lower())


if __name__ == "__main__":
    main()
