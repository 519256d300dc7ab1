"""Run the LocalDrop server: `python -m localdrop`."""
import logging

import uvicorn

from localdrop.config import settings
from localdrop.network import get_local_ip

logger = logging.getLogger("localdrop")


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    port = settings.API_PORT
    logger.info("LocalDrop is starting")
    logger.info(f"  This machine: http://localhost:{port}")
    logger.info(f"  Local network: http://{get_local_ip()}:{port}")
    logger.info("Press Ctrl+C to stop")

    uvicorn.run(
        "localdrop.main:app",
        host=settings.API_HOST,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
