"""Run the API server: ``python -m tablematch``."""
import logging

import uvicorn

from tablematch.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger("tablematch")
    logger.info(f"Server is running on http://{settings.host}:{settings.port}")
    logger.info(f"User data stored in: {settings.users_file}")
    uvicorn.run("tablematch.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
