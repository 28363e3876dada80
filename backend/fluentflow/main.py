"""
Point d'entrée principal de l'API FluentFlow.
Démarrage : uvicorn fluentflow.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

import fluentflow.models  # noqa: F401  enregistre tous les modèles dans Base.metadata avant les routers
from fluentflow.config import settings
from fluentflow.routers import (
    auth,
    classrooms,
    goals,
    holidays,
    notes,
    reports,
    schedule,
    sessions,
    students,
    teachers,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : configure la journalisation au démarrage."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("FluentFlow API démarrée (env=%s).", settings.ENV)
    yield
    logger.info("FluentFlow API arrêtée.")


app = FastAPI(
    title="FluentFlow API",
    description="API du tableau de bord de suivi orthophonique : élèves, objectifs, séances, planning",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS : autorise tous les ports localhost en développement (à restreindre en production).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(auth.router)
app.include_router(students.router)
app.include_router(teachers.router)
app.include_router(classrooms.router)
app.include_router(goals.router)
app.include_router(schedule.router)
app.include_router(holidays.router)
app.include_router(sessions.router)
app.include_router(notes.router)
app.include_router(reports.router)


@app.exception_handler(SQLAlchemyError)
async def persistence_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Toute erreur de la base de données est journalisée et renvoyée en 500 générique."""
    logger.error("Erreur de persistance sur %s %s : %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Erreur de persistance."},
    )


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
    return {"status": "ok", "service": "FluentFlow API", "version": "0.1.0"}
