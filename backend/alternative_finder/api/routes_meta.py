import os

from fastapi import APIRouter, Depends

from alternative_finder.core.config import Settings, get_settings

router = APIRouter(tags=["meta"])


@router.get("/")
def root():
    return {
        "name": "AlternativeFinder API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "version": "/version",
        "detect": "/detect-product",
    }


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/version")
def version(cfg: Settings = Depends(get_settings)):
    return {
        "version": cfg.APP_VERSION,
        "build": cfg.BUILD_ID,
        "git_commit": os.environ.get("GIT_COMMIT"),
    }
