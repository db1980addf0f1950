from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from habit_tracker.clock import DateProvider, SystemDateProvider
from habit_tracker.config import Settings, settings as default_settings
from habit_tracker.database.db import init_db
from habit_tracker.database.habit_store import HabitStore
from habit_tracker.database.session import (
    build_sqlalchemy_database_url_from_settings,
    get_engine,
    get_local_session,
)
from habit_tracker.exceptions import ArchivedConflict, HabitError, NotFound, StorageError, ValidationError
from habit_tracker.log import configure_logging, get_logger
from habit_tracker.router import guide_router, habits_router
from habit_tracker.router.api.logics.guide_logic import GuideChecker
from habit_tracker.router.api.logics.habit_logic import HabitService

log = get_logger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    ArchivedConflict: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def habit_error_handler(request: Request, exc: HabitError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def create_app(_settings: Optional[Settings] = None, clock: Optional[DateProvider] = None) -> FastAPI:
    """
    Build the application: database engine, schema, habit service and routes.

    Parameters:
        _settings (Settings, optional): Settings to use instead of the ones read
        from the environment.
        clock (DateProvider, optional): Source of today's date. Defaults to the
        wall clock in the configured timezone.

    Returns:
        FastAPI: The configured application. Its ``state`` holds the engine and
        the habit service for the lifetime of the app.
    """
    _settings = _settings or default_settings
    configure_logging(_settings.LOG_LEVEL)

    engine = get_engine(build_sqlalchemy_database_url_from_settings(_settings))
    init_db(engine)
    store = HabitStore(get_local_session(engine))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("%s %s started in %s mode", _settings.PROJECT_NAME, _settings.API_VERSION, _settings.ENV)
        yield
        engine.dispose()
        log.info("database engine disposed")

    app = FastAPI(
        lifespan=lifespan,
        title=_settings.PROJECT_NAME,
        version=_settings.API_VERSION,
    )
    app.state.engine = engine
    app.state.habit_service = HabitService(
        store,
        clock or SystemDateProvider(_settings.TIMEZONE),
        history_default_limit=_settings.HISTORY_DEFAULT_LIMIT,
        history_max_limit=_settings.HISTORY_MAX_LIMIT,
    )
    app.state.guide_checker = GuideChecker(_settings.PUBLIC_DIR)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            _settings.FRONTEND_URL,
            "http://localhost:3005",  # For local development
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(HabitError, habit_error_handler)

    app.include_router(habits_router, prefix="/api/habits", tags=["Habits"])
    app.include_router(guide_router, prefix="/api/guide", tags=["Guide"])

    #####################
    ### Root Endpoint ###
    #####################
    @app.get("/api")
    def read_root():
        return {"project": _settings.PROJECT_NAME, "environment": _settings.ENV, "version": _settings.API_VERSION}

    # front-end folders, mounted last so the API routes win
    if _settings.GUIDE_DIR.is_dir():
        app.mount("/guide", StaticFiles(directory=_settings.GUIDE_DIR, html=True), name="guide")
    if _settings.PUBLIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=_settings.PUBLIC_DIR, html=True), name="public")

    return app

