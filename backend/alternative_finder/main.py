"""
AlternativeFinder API - FastAPI Main Entry

LOCAL:
    cd backend
    python -m uvicorn alternative_finder.main:app --reload --host 0.0.0.0 --port 8000
    (or: alternative-finder serve --reload)

TEST:
    curl -i http://127.0.0.1:8000/health
    curl -i -X OPTIONS http://127.0.0.1:8000/detect-product
    curl -i -X POST http://127.0.0.1:8000/detect-product \
        -H 'Content-Type: application/json' \
        -d '{"image": "https://example.com/can.jpg"}'

PRODUCTION:
    Start Command:
        python -m uvicorn alternative_finder.main:app --host 0.0.0.0 --port $PORT

    The scanner client calls <SUPABASE_URL>/functions/v1/detect-product, so the
    prefixed path is served as well.
"""

from fastapi import FastAPI

from alternative_finder.core.config import settings
from alternative_finder.core.logs import configure_logging

# Routers
from alternative_finder.api.routes_detect import router as detect_router
from alternative_finder.api.routes_meta import router as meta_router


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="AlternativeFinder API",
        version=settings.APP_VERSION,
        description="Classifies a product photo as American-brand or not (label detection + brand match)",
    )

    # CORS headers are set per-response in routes_detect (preflight must be an empty 200)

    app.include_router(meta_router)
    app.include_router(detect_router)

    return app


app = create_app()
