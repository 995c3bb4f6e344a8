from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from bed_planner.core.config import settings


def build_engine(database_url: str = None, echo: bool = None):
    """Create a synchronous engine for the given URL"""
    url = database_url or settings.DATABASE_URL
    echo = settings.DEBUG if echo is None else echo

    if "sqlite" in url.lower():
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            # One shared connection, otherwise each session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=echo
    )


engine = build_engine()
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

# Base model
Base = declarative_base()


def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Initialize database tables"""
    # Table classes register themselves on Base when their modules are imported
    from bed_planner.domain.patients import models as _patients  # noqa: F401
    from bed_planner.domain.beds import models as _beds  # noqa: F401
    from bed_planner.domain.stays import models as _stays  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def close_db():
    """Close database connections"""
    engine.dispose()
