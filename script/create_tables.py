# create_tables.py
from sqlalchemy import inspect

from habit_tracker.config import settings
from habit_tracker.database.db import init_db
from habit_tracker.database.session import build_sqlalchemy_database_url_from_settings, get_engine

engine = get_engine(build_sqlalchemy_database_url_from_settings(settings))

init_db(engine)
print("✅ Tables created.")

inspector = inspect(engine)
print("📋 Existing tables:", inspector.get_table_names())
