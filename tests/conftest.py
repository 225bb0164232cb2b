import os
import sys
from pathlib import Path
import pytest

# Ensure project root is on sys.path so tests can import 'mes' package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Tests use their own sqlite file; must be set before 'mes' is imported
os.environ.setdefault("DATABASE_URL", f"sqlite:///{ROOT / 'test_mes.db'}")

from mes.db import Base, engine, SessionLocal, reset_db as reset_schema


@pytest.fixture(autouse=True)
def reset_db():
    # Every test starts from an empty schema
    reset_schema()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
