"""Database configuration and session management."""

import os
import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv

from blog_api.models import Base

# Load environment variables
load_dotenv()

# Configure logging
logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL must be set in .env file")

logger.info(f"Database backend: {make_url(DATABASE_URL).get_backend_name()}")

# SQLite connections are shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Create engine
engine = create_engine(DATABASE_URL, connect_args=connect_args)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create the users and blogs tables if they do not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready: {', '.join(Base.metadata.tables)}")


def get_db():
    """
    Per-request session for the user and blog routers.

    Sessions come from the process-wide pooled engine. Closing returns the
    connection to the pool whether the handler returned, answered with a
    411/403, or raised into the 500 handler.

    Yields:
        Session: SQLAlchemy session bound to ``engine``
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
