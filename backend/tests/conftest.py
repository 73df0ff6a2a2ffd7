import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_PASSWORD", "indomitable-lions")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lionscout.models import Base, Player


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def players(db):
    rows = [
        Player(id="p-mbarga", name="Junior Mbarga", position="Forward", position_fr="Attaquant",
               club="Coton Sport", region="Nord", image="/img/mbarga.jpg", rating=8.4,
               video_url="/videos/mbarga.mp4", age=19),
        Player(id="p-fotso", name="Aristide Fotso", position="Midfielder", position_fr="Milieu",
               club="Canon Yaoundé", region="Centre", image="/img/fotso.jpg", rating=7.9,
               video_url="/videos/fotso.mp4", age=21),
        Player(id="p-ekambi", name="Serge Ekambi", position="Goalkeeper", position_fr="Gardien",
               club="Union Douala", region="Littoral", image="/img/ekambi.jpg", rating=7.2,
               video_url=None, age=23),
    ]
    db.add_all(rows)
    db.commit()
    return rows
