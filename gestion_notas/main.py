from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from gestion_notas.core.config import settings
from gestion_notas.core.exceptions import GestionNotasError
from gestion_notas.db.init_db import init_db
from gestion_notas.api.routes import usuarios
from gestion_notas.api.routes import auth
from gestion_notas.api.routes import estudiantes
from gestion_notas.api.routes import docentes
from gestion_notas.api.routes import cursos
from gestion_notas.api.routes import notas
import logging

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version="1.0.0")

@app.on_event("startup")
def startup_event():
    init_db()

@app.exception_handler(GestionNotasError)
async def gestion_notas_error_handler(request: Request, exc: GestionNotasError):
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_dict()})

@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Carrera entre la verificacion previa y el commit: la restriccion UNIQUE decide
    logger.warning("Conflicto de unicidad en %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content={"detail": {
            "code": "CONFLICTO_UNICIDAD",
            "message": "El registro viola una restriccion de unicidad",
            "details": {}
        }}
    )

@app.get("/health", tags=["health"])
def health_check():
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT
    }

app.include_router(usuarios.router, prefix="/api", tags=["usuarios"])
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(estudiantes.router, prefix="/api", tags=["estudiantes"])
app.include_router(docentes.router, prefix="/api", tags=["docentes"])
app.include_router(cursos.router, prefix="/api", tags=["cursos"])
app.include_router(notas.router, prefix="/api", tags=["notas"])
