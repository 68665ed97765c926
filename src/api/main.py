"""Process entrypoint: serve the film library API with uvicorn."""

from __future__ import annotations

import uvicorn

from src.api.api_config import get_api_config
from src.common.logging import configure_logging


def main() -> None:
    configure_logging()
    config = get_api_config()
    uvicorn.run("src.api.app:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
