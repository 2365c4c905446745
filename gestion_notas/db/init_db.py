import logging

from sqlalchemy.orm import Session

from gestion_notas.core.config import settings
from gestion_notas.crud import crud_usuario
from gestion_notas.db.base import Base
from gestion_notas.db.session import SessionLocal, engine
from gestion_notas.models.usuario import RolEnum
from gestion_notas.scripts.cargar_datos_prueba import cargar_datos_prueba

logger = logging.getLogger(__name__)


def crear_admin_por_defecto(db: Session):
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return None
    if crud_usuario.get_usuario_by_email(db, settings.ADMIN_EMAIL):
        logger.info("Usuario admin ya existe en el sistema")
        return None
    admin = crud_usuario.create_usuario(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, RolEnum.ADMIN)
    logger.info("Usuario admin creado con ID: %s", admin.id)
    return admin


def init_db():
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        crear_admin_por_defecto(db)
        if settings.CARGAR_DATOS_PRUEBA:
            cargar_datos_prueba(db)
    finally:
        db.close()
