"""Run the API with uvicorn: ``python -m roster``."""
import uvicorn

from roster.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "roster.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
