"""Run the tribute server: ``python -m iwd``."""
from __future__ import annotations

import uvicorn

from iwd.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("iwd.app:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
