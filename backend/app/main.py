from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from app.api.routes import auth, offers, users, wishes, wishlists
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logger import configure_logging
from app.db.session import Base, engine


logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    description="КупиПодариДай: вишлисты, желания и сборы на подарки",
    version="1.0.0",
    docs_url=settings.docs_url,
)

cors_origins = settings.backend_cors_origins
allow_any_origin = "*" in cors_origins

logger.info("CORS origins parsed=%s", cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=not allow_any_origin,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)


@app.middleware("http")
async def tracing_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid4())
    start = perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "Request failed id=%s method=%s path=%s duration_ms=%.2f",
            request_id,
            request.method,
            request.url.path,
            (perf_counter() - start) * 1000.0,
        )
        raise

    logger.info(
        "Request completed id=%s method=%s path=%s status=%s duration_ms=%.2f",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        (perf_counter() - start) * 1000.0,
    )
    response.headers["X-Request-Id"] = request_id
    return response


@app.on_event("startup")
async def on_startup() -> None:
    db_url = make_url(settings.postgres_dsn)
    logger.info(
        "DB config driver=%s host=%s database=%s",
        db_url.get_backend_name(),
        db_url.host,
        db_url.database,
    )

    from app.models import models as _models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(wishes.router)
app.include_router(offers.router)
app.include_router(wishlists.router, prefix=wishlists.WISHLISTS_PREFIX)
app.include_router(wishlists.router, prefix=wishlists.WISHLISTS_ALIAS_PREFIX, include_in_schema=False)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
