"""Review intake FastAPI application.

Serves the review submission/listing API and the uploaded review images.
Requests under ``/api/reviews`` run inside the Reviews domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 5000
    review-intake                          # console entry point, reads HOST/PORT
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from src/reviews/domain.toml:
#   - "test"       → in-memory provider
#   - "production" → PostgreSQL provider (DATABASE_URL)
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from protean.exceptions import ValidationError
from protean.integrations.fastapi import register_exception_handlers
from reviews.domain import reviews
from reviews.settings import Settings, get_settings
from reviews.uploads.store import UploadStore
from reviews.utils.logging import add_context, clear_context

reviews.init()

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/api/reviews": reviews,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------
async def _request_validation_handler(request: Request, exc: RequestValidationError):
    fields: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "__all__"
        fields.setdefault(field, []).append(error["msg"])
    return JSONResponse(status_code=400, content={"error": "Invalid review submission", "fields": fields})


async def _domain_validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid review submission", "fields": exc.messages})


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; the uploads directory is created here."""
    settings = settings or get_settings()

    uploads_dir = UploadStore(settings.uploads_dir).ensure_directory()

    app = FastAPI(
        title="Review Intake API",
        description="Customer product reviews with image uploads and mailbox notices",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each domain request."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: pass through (uploads, health check, docs)
        return await call_next(request)

    register_exception_handlers(app)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _domain_validation_handler)

    app.dependency_overrides[get_settings] = lambda: settings

    from reviews.api.routes import review_router

    app.include_router(review_router)
    app.mount("/uploads", StaticFiles(directory=uploads_dir), name="uploads")

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domains": {"reviews": {"name": reviews.name}},
            }
        )

    logger.info("Review intake application created", uploads_dir=str(uploads_dir))
    return app


app = create_app()


def main():
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
