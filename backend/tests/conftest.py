"""
Point the app at an in-memory SQLite database and cheap bcrypt before any
test module imports it, then give every test a fresh schema.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENV"] = "local"
os.environ["RESEND_API_KEY"] = ""

import pytest

from traininglog import models  # noqa: F401  # registers tables on Base.metadata
from traininglog.db import Base, engine


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
