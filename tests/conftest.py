import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the repository root is on the import path so `import habit_tracker`
# works without installing the package.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from habit_tracker.clock import FixedDateProvider  # noqa: E402
from habit_tracker.config import Settings  # noqa: E402
from habit_tracker.database.db import init_db  # noqa: E402
from habit_tracker.database.habit_store import HabitStore  # noqa: E402
from habit_tracker.database.session import get_engine, get_local_session  # noqa: E402
from habit_tracker.main import create_app  # noqa: E402
from habit_tracker.router.api.logics.habit_logic import HabitService  # noqa: E402

DEFAULT_STYLE = """:root {
  --bg-page: #f8f9ff;
  --card-radius: 20px;
  --colour-done: #4ecb71;
  --font-main: 'Poppins', sans-serif;
}
"""

DEFAULT_HTML = """<!DOCTYPE html>
<html>
<head><title>Habit Tracker</title></head>
<body><div class="app"><div id="habit-grid"></div></div></body>
</html>
"""


@pytest.fixture
def engine(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'habits.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return HabitStore(get_local_session(engine))


@pytest.fixture
def clock():
    return FixedDateProvider("2025-03-15")


@pytest.fixture
def service(store, clock):
    return HabitService(store, clock)


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "style.css").write_text(DEFAULT_STYLE, encoding="utf-8")
    (public / "index.html").write_text(DEFAULT_HTML, encoding="utf-8")
    return public


@pytest.fixture
def test_settings(tmp_path, public_dir):
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'data' / 'api.db'}",
        LOG_LEVEL="WARNING",
        PUBLIC_DIR=public_dir,
        GUIDE_DIR=tmp_path / "guide",
    )


@pytest.fixture
def client(test_settings, clock):
    app = create_app(test_settings, clock=clock)
    with TestClient(app) as client:
        yield client
