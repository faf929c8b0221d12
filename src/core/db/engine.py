from pathlib import Path
from sqlalchemy import create_engine

from src.core.config import DATABASE_URL

if DATABASE_URL.startswith("sqlite:///.data/"):
    # Ensure the .data directory exists
    Path(".data").mkdir(exist_ok=True)

engine = create_engine(
    DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    pool_recycle=3600,
)

# Create all tables on import
from src.core.db.tables.base import Base
from src.core.db.tables.secretkey import SecretKey

Base.metadata.create_all(engine)
