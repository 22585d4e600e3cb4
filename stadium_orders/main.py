from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from stadium_orders.core.config import settings
from stadium_orders.core.errors import DomainError
from stadium_orders.db import session as db_session
from stadium_orders.db.seed import seed_database
from stadium_orders.routes import auth as auth_routes
from stadium_orders.routes import health
from stadium_orders.routes import kitchen as kitchen_routes
from stadium_orders.routes import orders as orders_routes
from stadium_orders.routes import products as products_routes
from stadium_orders.routes import sections as sections_routes
import logging
import threading
from collections import defaultdict
import time

app = FastAPI(
    title="Stadium Orders API",
    version="1.0.0",
    description="Seat delivery and pickup ordering for stadium concessions",
    # Avoid automatic 307 redirects between /path and /path/
    redirect_slashes=False,
)

# Configure logging level from env
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)
# Use a dedicated request logger to avoid uvicorn.access formatter expectations
_req_logger = logging.getLogger("stadium_orders.request")
_req_logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))

# In-memory request counters per route (method + path), guarded by a lock
_request_counts = defaultdict(int)
_req_lock = threading.Lock()
_global_request_count = 0


def get_request_counts() -> dict:
    with _req_lock:
        return dict(_request_counts)


@app.middleware("http")
async def request_count_middleware(request: Request, call_next):
    global _global_request_count
    key = f"{request.method} {request.url.path}"

    # Increment counter before executing handler
    with _req_lock:
        _request_counts[key] += 1
        count_val = _request_counts[key]
        _global_request_count += 1
        global_count_val = _global_request_count

    # Log every N hits to avoid spam
    if count_val % settings.REQUEST_LOG_EVERY_N == 0:
        _req_logger.info("Request count threshold reached: %s -> %s (global=%s)", key, count_val, global_count_val)

    # Per-request DB query counter; the SQLAlchemy listener increments it
    db_counter = [0]
    db_count_token = db_session.request_db_query_count.set(db_counter)
    start = time.perf_counter()
    try:
        response = await call_next(request)
    finally:
        per_req_db_count = db_counter[0]
        db_session.request_db_query_count.reset(db_count_token)
    duration_ms = int((time.perf_counter() - start) * 1000)

    if settings.REQUEST_LOG_VERBOSE:
        prefixes = [p.strip() for p in (settings.REQUEST_LOG_INCLUDE_PREFIXES or "").split(",") if p.strip()]
        path_full = request.url.path
        if any(path_full.startswith(pref) for pref in prefixes):
            qs = request.url.query
            path_qs = f"{path_full}?{qs}" if qs else path_full
            _req_logger.info(
                "%s %s -> %s in %sms | route_count=%s global_count=%s db_queries=%s db_queries_total=%s",
                request.method, path_qs, response.status_code, duration_ms,
                count_val, global_count_val, per_req_db_count,
                db_session.get_global_db_queries_total(),
            )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error rendering: every error body is {"message": ...} ---

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    body = {"message": exc.message}
    if exc.field:
        body["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc looks like ("body", "items", 0, "quantity")
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc) or None
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    return JSONResponse(status_code=400, content={"message": message, "field": field})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.include_router(health.router)
app.include_router(auth_routes.router)
app.include_router(products_routes.router)
app.include_router(sections_routes.router)
app.include_router(orders_routes.router)
app.include_router(kitchen_routes.router)


@app.on_event("startup")
def on_startup():
    # create database tables if they don't exist
    db_session.create_db()
    if settings.SEED_ON_STARTUP:
        db = db_session.SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()


@app.get("/")
def root():
    return {"status": "Stadium Orders API is running"}
