"""Run the API with uvicorn: `python -m howl`."""

import uvicorn

from howl.config import settings


def main() -> None:
    uvicorn.run(
        "howl.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
