import uvicorn

from app.core.config import get_settings


def main() -> None:
    """Serves the API; configuration comes from HWALLET_* environment variables."""
    settings = get_settings()
    uvicorn.run("app.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
