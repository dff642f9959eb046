"""
Point d'entrée principal de l'API de gestion universitaire.
Démarrage : uvicorn app.main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

import app.models  # noqa: F401 : enregistre tous les modèles dans Base.metadata avant les routers
from app.config import settings
from app.database import init_db
from app.exceptions import AppError
from app.routers import attendance, auth, faculties, schedule, students, subjects, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def docs_urls(env: str) -> dict:
    """URLs de la documentation interactive, désactivée en production."""
    if env == "production":
        return {"docs_url": None, "redoc_url": None, "openapi_url": None}
    return {"docs_url": "/api/docs", "redoc_url": "/api/redoc", "openapi_url": "/api/openapi.json"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : initialise la base si INIT_DB est activé."""
    if settings.INIT_DB:
        logger.info("Initialisation de la base de données (ENV=%s)...", settings.ENV)
        init_db()
    yield


app = FastAPI(
    title="University API",
    description="API de gestion des étudiants, facultés, groupes, matières, emplois du temps et présences",
    version="0.1.0",
    **docs_urls(settings.ENV),
    lifespan=lifespan,
)

# CORS : autorise tous les ports localhost en développement (à restreindre en production).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Journalise chaque requête : méthode, chemin, statut et durée."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(students.router)
app.include_router(faculties.router)
app.include_router(faculties.groups_router)
app.include_router(subjects.router)
app.include_router(schedule.router)
app.include_router(attendance.router)


# --- Conversion des erreurs en réponses {"error": <message>} ---

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps, chemin ou paramètre invalide → 400 avec les messages de validation."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Requête invalide."})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Le détail de l'erreur reste dans les logs : le client reçoit un message opaque."""
    logger.error("Erreur base de données sur %s %s : %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Erreur de la base de données."})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Une erreur interne est survenue."},
    )


@app.get("/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "University API", "version": "0.1.0"}
