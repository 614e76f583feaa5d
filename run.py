"""Start the engine API under uvicorn with the configured host, port and log level."""

import uvicorn
from kroniki.api.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "kroniki.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
