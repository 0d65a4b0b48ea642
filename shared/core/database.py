from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from shared.core.config import HOUSEKEEPING_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2

_is_sqlite = HOUSEKEEPING_DATABASE_URL.startswith("sqlite")

if _is_sqlite:
    # In-memory sqlite must share one connection across threads
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
else:
    _engine_kwargs = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": POOL_SIZE,          # max idle connections
        "max_overflow": MAX_OVERFLOW,    # max temporary extra connections
        "pool_timeout": 30,              # wait time before failing
    }

housekeeping_engine = create_engine(HOUSEKEEPING_DATABASE_URL, **_engine_kwargs)

if _is_sqlite:
    # let SQLAlchemy own BEGIN so SAVEPOINTs behave under pysqlite
    @event.listens_for(housekeeping_engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(housekeeping_engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

HousekeepingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=housekeeping_engine)


# Dependency
def get_housekeeping_db():
    db = HousekeepingSessionLocal()
    try:
        yield db
    finally:
        db.close()
