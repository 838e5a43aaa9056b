from __future__ import annotations

"""Run the API with uvicorn."""

import uvicorn

from orgchart.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("orgchart.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
