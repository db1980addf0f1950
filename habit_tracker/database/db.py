from sqlalchemy.engine import Engine

from habit_tracker.database.base_class import Base
from habit_tracker.log import get_logger

# imported for their side effect of registering tables on Base.metadata
from habit_tracker.model import habits, habit_checkins  # noqa: F401

log = get_logger(__name__)


def init_db(engine: Engine) -> None:
    """Create the habits and habit_checkins tables if they are missing."""
    log.info("initialising database schema on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
