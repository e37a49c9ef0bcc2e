"""
Point d'entrée principal de l'API de gestion des classes.
Démarrage : uvicorn classroom_api.main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Enregistre tous les modèles dans Base.metadata avant les routers
import classroom_api.models  # noqa: F401
from classroom_api.config import settings
from classroom_api.database import SessionLocal
from classroom_api.exceptions import AppError
from classroom_api.routers import (
    auth,
    classroom_students,
    classrooms,
    join_requests,
    lectures,
    media,
    profile,
    users,
)
from classroom_api.services import user_service

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : crée le compte admin configuré au démarrage."""
    if settings.ADMIN_EMAIL:
        db = SessionLocal()
        try:
            user_service.seed_admin(db)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Classroom API",
    description="API de gestion des classes, des demandes d'adhésion, des leçons et des médias",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS: origines autorisées configurables (localhost par défaut en développement).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s -> %d (%.0f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(users.router)
app.include_router(classrooms.router)
app.include_router(join_requests.router)
app.include_router(classroom_students.router)
app.include_router(lectures.router)
app.include_router(media.router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convertit les exceptions métier levées par les services en réponse {"detail": ...}."""
    if exc.status_code >= 500:
        logger.error("%s %s : %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "Classroom API", "version": "0.1.0"}
