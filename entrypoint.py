"""Serve the bookkeeping API with uvicorn on the configured host and port."""
import uvicorn

from comptapro.config.settings import get_settings
from comptapro.main import app


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
