import uvicorn

from habit_tracker.config import settings


def main():  # pragma: no cover
    uvicorn.run(
        "habit_tracker.main:create_app",
        factory=True,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.ENV in ["test", "dev"],
        log_level="debug" if settings.ENV in ["test", "dev"] else None,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
