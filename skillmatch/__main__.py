"""Run the development server: ``python -m skillmatch``."""

import uvicorn

from skillmatch.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "skillmatch.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
