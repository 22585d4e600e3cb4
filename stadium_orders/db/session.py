from sqlalchemy import create_engine, event
from sqlalchemy.pool import QueuePool
from sqlalchemy.orm import sessionmaker, declarative_base
from stadium_orders.core.config import settings
import logging
import threading
import contextvars

DATABASE_URL = settings.DATABASE_URL


def build_engine(url: str):
    """Create the SQLAlchemy engine for ``url``.

    Server databases get a pre-pinged QueuePool sized from settings so stale
    connections ("MySQL server has gone away") are recycled. SQLite keeps the
    driver's default pool and only needs cross-thread access enabled.
    """
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=settings.DB_POOL_RECYCLE,
        poolclass=QueuePool,
    )


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# --- Pool monitoring: log connects and checkouts to help diagnose excess connections ---
_pool_logger = logging.getLogger("stadium_orders.db.pool")
_pool_logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
_connect_count = 0
_checkout_count = 0
_checkin_count = 0
_pool_lock = threading.Lock()

# --- Per-request DB query counting using ContextVar ---
# The HTTP middleware installs a one-element list at the start of each request
# and the cursor listener below increments it in place. A mutable holder is
# used because sync endpoints run in a copied context on the threadpool.
request_db_query_count = contextvars.ContextVar("request_db_query_count", default=None)
_global_db_query_count = 0


def _on_connect(dbapi_connection, connection_record):
    global _connect_count
    with _pool_lock:
        _connect_count += 1
        cnt = _connect_count
    if cnt % settings.DB_LOG_EVERY_N == 0:
        _pool_logger.info("SQLAlchemy pool CONNECT events: total opened=%s", cnt)


def _on_checkout(dbapi_connection, connection_record, connection_proxy):
    global _checkout_count
    with _pool_lock:
        _checkout_count += 1
        cnt = _checkout_count
    if cnt % settings.DB_LOG_EVERY_N == 0:
        _pool_logger.info("SQLAlchemy pool CHECKOUT events: total checkouts=%s", cnt)


def _on_checkin(dbapi_connection, connection_record):
    global _checkin_count
    with _pool_lock:
        _checkin_count += 1
        cnt = _checkin_count
    if cnt % settings.DB_LOG_EVERY_N == 0:
        _pool_logger.info("SQLAlchemy pool CHECKIN events: total checkins=%s", cnt)


def _on_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    global _global_db_query_count
    counter = request_db_query_count.get()
    if counter is not None:
        counter[0] += 1
    with _pool_lock:
        _global_db_query_count += 1


def instrument_engine(target_engine) -> None:
    """Attach pool and query-count listeners to ``target_engine``."""
    event.listen(target_engine, "connect", _on_connect)
    event.listen(target_engine, "checkout", _on_checkout)
    event.listen(target_engine, "checkin", _on_checkin)
    event.listen(target_engine, "before_cursor_execute", _on_before_cursor_execute)


instrument_engine(engine)


def get_global_db_queries_total() -> int:
    """Return the total number of DB roundtrips since process start."""
    return int(_global_db_query_count)


def get_db():
    """FastAPI dependency that provides a scoped SQLAlchemy Session.

    Ensures the connection is checked out from the pool and always returned
    after the request, preventing leaks and excessive new connections.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_db(bind=None):
    # Import models here so they are registered on the metadata
    import stadium_orders.models.user  # noqa: F401
    import stadium_orders.models.product  # noqa: F401
    import stadium_orders.models.section  # noqa: F401
    import stadium_orders.models.order  # noqa: F401
    import stadium_orders.models.order_item  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
