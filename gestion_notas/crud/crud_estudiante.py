import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from gestion_notas.core.config import settings
from gestion_notas.core.exceptions import NotFoundError, StorageError
from gestion_notas.crud import crud_usuario
from gestion_notas.crud.comun import generar_codigo, resolver_usuario_libre, verificar_codigo_disponible
from gestion_notas.models.estudiante import Estudiante
from gestion_notas.models.usuario import RolEnum
from gestion_notas.schemas.estudiante import (
    EstudianteCompletoCreate,
    EstudianteCreate,
    EstudianteUpdate,
    PerfilEstudianteUpdate,
)
from gestion_notas.services import almacenamiento

logger = logging.getLogger(__name__)

RECURSO = "Estudiante"
PREFIJO_CODIGO = "EST"
DIGITOS_CODIGO = 6

_CAMPOS_DATOS = ("nombres", "apellidos", "email", "telefono", "direccion", "distrito", "foto", "fecha_nacimiento")

def generar_codigo_estudiante(db: Session) -> str:
    return generar_codigo(db, Estudiante, PREFIJO_CODIGO, DIGITOS_CODIGO)

def _build_estudiante(db: Session, estudiante: EstudianteCreate | EstudianteCompletoCreate) -> Estudiante:
    verificar_codigo_disponible(db, Estudiante, RECURSO, estudiante.codigo)
    return Estudiante(
        **{campo: getattr(estudiante, campo) for campo in _CAMPOS_DATOS},
        codigo=estudiante.codigo or generar_codigo_estudiante(db),
    )

def create_estudiante(db: Session, estudiante: EstudianteCreate):
    db_estudiante = _build_estudiante(db, estudiante)
    if estudiante.id_usuario is not None:
        db_estudiante.usuario = resolver_usuario_libre(db, Estudiante, RECURSO, estudiante.id_usuario)
    db.add(db_estudiante)
    db.commit()
    db.refresh(db_estudiante)
    logger.info("Estudiante creado id=%s codigo=%s", db_estudiante.id, db_estudiante.codigo)
    return db_estudiante

def create_estudiante_completo(db: Session, datos: EstudianteCompletoCreate):
    """Crea usuario (rol ESTUDIANTE) y estudiante en una sola transaccion."""
    db_estudiante = _build_estudiante(db, datos)
    db_estudiante.usuario = crud_usuario.build_usuario(db, datos.email, datos.contrasena, RolEnum.ESTUDIANTE)
    db.add(db_estudiante)
    db.commit()
    db.refresh(db_estudiante)
    logger.info("Estudiante creado con usuario id=%s codigo=%s", db_estudiante.id, db_estudiante.codigo)
    return db_estudiante

def get_estudiante_by_id(db: Session, id: int):
    return db.query(Estudiante).filter(Estudiante.id == id).first()

def get_estudiante_by_codigo(db: Session, codigo: str):
    return db.query(Estudiante).filter(Estudiante.codigo == codigo).first()

def get_estudiante_by_usuario(db: Session, usuario_id: int):
    return db.query(Estudiante).filter(Estudiante.usuario_id == usuario_id).first()

def get_all_estudiantes(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Estudiante).order_by(Estudiante.id).offset(skip).limit(limit).all()

def buscar_estudiantes_por_nombre(db: Session, nombre: str):
    patron = f"%{nombre.lower()}%"
    return db.query(Estudiante).filter(
        or_(func.lower(Estudiante.nombres).like(patron), func.lower(Estudiante.apellidos).like(patron))
    ).order_by(Estudiante.id).all()

def get_estudiantes_by_distrito(db: Session, distrito: str):
    return db.query(Estudiante).filter(Estudiante.distrito == distrito).order_by(Estudiante.id).all()

def update_estudiante(db: Session, id: int, datos: EstudianteUpdate):
    estudiante = get_estudiante_by_id(db, id)
    if not estudiante:
        raise NotFoundError(RECURSO, id)

    if datos.codigo is not None and datos.codigo != estudiante.codigo:
        verificar_codigo_disponible(db, Estudiante, RECURSO, datos.codigo, excluir_id=id)
        estudiante.codigo = datos.codigo
    if datos.id_usuario is not None and datos.id_usuario != estudiante.usuario_id:
        estudiante.usuario = resolver_usuario_libre(db, Estudiante, RECURSO, datos.id_usuario, excluir_id=id)

    for campo in _CAMPOS_DATOS:
        setattr(estudiante, campo, getattr(datos, campo))

    db.commit()
    db.refresh(estudiante)
    return estudiante

def update_perfil_estudiante(db: Session, id: int, datos: PerfilEstudianteUpdate):
    """
    Actualiza solo los campos enviados. El email se guarda en el estudiante y
    en el usuario vinculado, si lo hay.
    """
    estudiante = get_estudiante_by_id(db, id)
    if not estudiante:
        raise NotFoundError(RECURSO, id)

    cambios = datos.model_dump(exclude_unset=True, exclude_none=True)
    email = cambios.pop("email", None)
    for campo, valor in cambios.items():
        setattr(estudiante, campo, valor)
    if email is not None:
        if estudiante.usuario is not None:
            crud_usuario.aplicar_email(db, estudiante.usuario, email)
        estudiante.email = email

    db.commit()
    db.refresh(estudiante)
    return estudiante

def update_foto_estudiante(db: Session, id: int, archivo):
    estudiante = get_estudiante_by_id(db, id)
    if not estudiante:
        raise NotFoundError(RECURSO, id)

    nuevo = almacenamiento.guardar_archivo(archivo, almacenamiento.CATEGORIA_ESTUDIANTES)
    anterior = estudiante.foto
    estudiante.foto = nuevo
    db.commit()
    db.refresh(estudiante)

    # La foto anterior se borra solo despues del commit
    if anterior:
        try:
            almacenamiento.eliminar_archivo(anterior, almacenamiento.CATEGORIA_ESTUDIANTES)
        except StorageError as e:
            logger.warning("No se pudo eliminar la foto anterior %s del estudiante %s: %s", anterior, id, e)
    return estudiante

def delete_estudiante(db: Session, id: int, eliminar_usuario: Optional[bool] = None) -> None:
    estudiante = get_estudiante_by_id(db, id)
    if not estudiante:
        raise NotFoundError(RECURSO, id)
    if eliminar_usuario is None:
        eliminar_usuario = settings.ELIMINAR_USUARIO_CON_PERFIL

    usuario = estudiante.usuario
    db.delete(estudiante)
    if eliminar_usuario and usuario is not None:
        # Un docente puede seguir vinculado a la misma cuenta
        crud_usuario.eliminar_con_perfiles(db, usuario, cascada=False)
    db.commit()
    logger.info("Estudiante eliminado id=%s", id)

def contar_por_distrito(db: Session):
    filas = db.query(Estudiante.distrito, func.count(Estudiante.id)) \
        .group_by(Estudiante.distrito).order_by(Estudiante.distrito).all()
    return [{"distrito": distrito, "total": total} for distrito, total in filas]
