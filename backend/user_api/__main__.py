"""Run the API with uvicorn: `python -m user_api` or the `user-api` script."""

import uvicorn

from user_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "user_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
