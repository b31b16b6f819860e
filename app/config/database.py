from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .settings import settings

def build_engine(url: str, schema: str = None, echo: bool = False) -> Engine:
    """Create an engine for the given URL, optionally pinned to a schema"""
    connect_args = {}
    if url.startswith("sqlite"):
        # SQLite connections are shared with the request threadpool
        connect_args = {"check_same_thread": False, "timeout": 30}

    engine = create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=echo,
        connect_args=connect_args
    )
    if schema:
        engine = engine.execution_options(schema_translate_map={None: schema})
    return engine

# Create engine
engine = build_engine(
    settings.sqlalchemy_database_url,
    schema=settings.database_schema,
    echo=settings.debug
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
