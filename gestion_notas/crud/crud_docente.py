import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from gestion_notas.core.config import settings
from gestion_notas.core.exceptions import NotFoundError, StorageError
from gestion_notas.crud import crud_usuario
from gestion_notas.crud.comun import generar_codigo, resolver_usuario_libre, verificar_codigo_disponible
from gestion_notas.models.docente import Docente
from gestion_notas.models.usuario import RolEnum, Usuario
from gestion_notas.schemas.docente import DocenteCompletoCreate, DocenteCreate, DocenteUpdate, PerfilDocenteUpdate
from gestion_notas.services import almacenamiento

logger = logging.getLogger(__name__)

RECURSO = "Docente"
PREFIJO_CODIGO = "DOC"
DIGITOS_CODIGO = 6

_CAMPOS_DATOS = (
    "nombres", "apellidos", "telefono", "especialidad", "direccion", "distrito", "foto", "fecha_contratacion",
)

def generar_codigo_docente(db: Session) -> str:
    return generar_codigo(db, Docente, PREFIJO_CODIGO, DIGITOS_CODIGO)

def _build_docente(db: Session, docente: DocenteCreate | DocenteCompletoCreate) -> Docente:
    verificar_codigo_disponible(db, Docente, RECURSO, docente.codigo)
    return Docente(
        **{campo: getattr(docente, campo) for campo in _CAMPOS_DATOS},
        codigo=docente.codigo or generar_codigo_docente(db),
    )

def create_docente(db: Session, docente: DocenteCreate):
    db_docente = _build_docente(db, docente)
    if docente.id_usuario is not None:
        db_docente.usuario = resolver_usuario_libre(db, Docente, RECURSO, docente.id_usuario)
    db.add(db_docente)
    db.commit()
    db.refresh(db_docente)
    logger.info("Docente creado id=%s codigo=%s", db_docente.id, db_docente.codigo)
    return db_docente

def create_docente_completo(db: Session, datos: DocenteCompletoCreate):
    db_docente = _build_docente(db, datos)
    db_docente.usuario = crud_usuario.build_usuario(db, datos.email, datos.contrasena, RolEnum.DOCENTE)
    db.add(db_docente)
    db.commit()
    db.refresh(db_docente)
    logger.info("Docente creado con usuario id=%s codigo=%s", db_docente.id, db_docente.codigo)
    return db_docente

def get_docente_by_id(db: Session, id: int):
    return db.query(Docente).filter(Docente.id == id).first()

def get_docente_by_usuario(db: Session, usuario_id: int):
    return db.query(Docente).filter(Docente.usuario_id == usuario_id).first()

def get_all_docentes(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Docente).order_by(Docente.id).offset(skip).limit(limit).all()

def get_docentes_by_especialidad(db: Session, especialidad: str):
    return db.query(Docente).filter(Docente.especialidad == especialidad).order_by(Docente.id).all()

def get_docentes_by_distrito(db: Session, distrito: str):
    return db.query(Docente).filter(Docente.distrito == distrito).order_by(Docente.id).all()

def get_docentes_activos(db: Session):
    # Docente no tiene bandera propia: activo significa usuario activo
    return db.query(Docente).join(Usuario, Docente.usuario_id == Usuario.id) \
        .filter(Usuario.activo.is_(True)).order_by(Docente.id).all()

def buscar_docentes_por_nombre(db: Session, nombre: str):
    patron = f"%{nombre.lower()}%"
    return db.query(Docente).filter(
        or_(func.lower(Docente.nombres).like(patron), func.lower(Docente.apellidos).like(patron))
    ).order_by(Docente.id).all()

def update_docente(db: Session, id: int, datos: DocenteUpdate):
    docente = get_docente_by_id(db, id)
    if not docente:
        raise NotFoundError(RECURSO, id)

    if datos.codigo is not None and datos.codigo != docente.codigo:
        verificar_codigo_disponible(db, Docente, RECURSO, datos.codigo, excluir_id=id)
        docente.codigo = datos.codigo
    if datos.id_usuario is not None and datos.id_usuario != docente.usuario_id:
        docente.usuario = resolver_usuario_libre(db, Docente, RECURSO, datos.id_usuario, excluir_id=id)

    for campo in _CAMPOS_DATOS:
        setattr(docente, campo, getattr(datos, campo))

    db.commit()
    db.refresh(docente)
    return docente

def update_perfil_docente(db: Session, id: int, datos: PerfilDocenteUpdate):
    docente = get_docente_by_id(db, id)
    if not docente:
        raise NotFoundError(RECURSO, id)

    cambios = datos.model_dump(exclude_unset=True, exclude_none=True)
    email = cambios.pop("email", None)
    for campo, valor in cambios.items():
        setattr(docente, campo, valor)
    if email is not None and docente.usuario is not None:
        crud_usuario.aplicar_email(db, docente.usuario, email)

    db.commit()
    db.refresh(docente)
    return docente

def update_foto_docente(db: Session, id: int, archivo):
    docente = get_docente_by_id(db, id)
    if not docente:
        raise NotFoundError(RECURSO, id)

    nuevo = almacenamiento.guardar_archivo(archivo, almacenamiento.CATEGORIA_DOCENTES)
    anterior = docente.foto
    docente.foto = nuevo
    db.commit()
    db.refresh(docente)

    if anterior:
        try:
            almacenamiento.eliminar_archivo(anterior, almacenamiento.CATEGORIA_DOCENTES)
        except StorageError as e:
            logger.warning("No se pudo eliminar la foto anterior %s del docente %s: %s", anterior, id, e)
    return docente

def delete_docente(db: Session, id: int, eliminar_usuario: Optional[bool] = None) -> None:
    """Elimina el docente; sus cursos quedan sin docente asignado."""
    docente = get_docente_by_id(db, id)
    if not docente:
        raise NotFoundError(RECURSO, id)
    if eliminar_usuario is None:
        eliminar_usuario = settings.ELIMINAR_USUARIO_CON_PERFIL

    usuario = docente.usuario
    db.delete(docente)
    if eliminar_usuario and usuario is not None:
        # Un estudiante puede seguir vinculado a la misma cuenta
        crud_usuario.eliminar_con_perfiles(db, usuario, cascada=False)
    db.commit()
    logger.info("Docente eliminado id=%s", id)

def contar_por_especialidad(db: Session):
    filas = db.query(Docente.especialidad, func.count(Docente.id)) \
        .group_by(Docente.especialidad).order_by(Docente.especialidad).all()
    return [{"especialidad": especialidad, "total": total} for especialidad, total in filas]
