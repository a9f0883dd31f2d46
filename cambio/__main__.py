import uvicorn

from cambio.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "cambio.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
