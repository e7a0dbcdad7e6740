"""Run the API with uvicorn: ``python -m stockapi``."""
from __future__ import annotations

import uvicorn

from stockapi.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "stockapi.app:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
