import logging

import uvicorn

from alarkhabil_frontend.settings import settings

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info(f"Listening on http://{settings.LISTEN_HOST}:{settings.LISTEN_PORT}")
    uvicorn.run(
        "alarkhabil_frontend.main:app",
        host=settings.LISTEN_HOST,
        port=settings.LISTEN_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
