import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from gestion_notas.core.exceptions import NotFoundError
from gestion_notas.crud.comun import generar_codigo, verificar_codigo_disponible
from gestion_notas.models.curso import Curso
from gestion_notas.models.docente import Docente
from gestion_notas.schemas.curso import CursoCreate, CursoUpdate

logger = logging.getLogger(__name__)

RECURSO = "Curso"
PREFIJO_CODIGO = "CUR"
DIGITOS_CODIGO = 4
CREDITOS_POR_DEFECTO = 3

def generar_codigo_curso(db: Session) -> str:
    return generar_codigo(db, Curso, PREFIJO_CODIGO, DIGITOS_CODIGO)

def _resolver_docente(db: Session, id_docente: Optional[int]) -> Optional[Docente]:
    if id_docente is None:
        return None
    docente = db.query(Docente).filter(Docente.id == id_docente).first()
    if not docente:
        raise NotFoundError("Docente", id_docente)
    return docente

def create_curso(db: Session, curso: CursoCreate):
    verificar_codigo_disponible(db, Curso, RECURSO, curso.codigo)
    db_curso = Curso(
        nombre=curso.nombre,
        codigo=curso.codigo or generar_codigo_curso(db),
        descripcion=curso.descripcion,
        creditos=curso.creditos if curso.creditos is not None else CREDITOS_POR_DEFECTO,
        activo=True,
        docente=_resolver_docente(db, curso.id_docente)
    )
    db.add(db_curso)
    db.commit()
    db.refresh(db_curso)
    logger.info("Curso creado id=%s codigo=%s", db_curso.id, db_curso.codigo)
    return db_curso

def get_curso_by_id(db: Session, id: int):
    return db.query(Curso).filter(Curso.id == id).first()

def get_curso_by_codigo(db: Session, codigo: str):
    return db.query(Curso).filter(Curso.codigo == codigo).first()

def get_all_cursos(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Curso).order_by(Curso.id).offset(skip).limit(limit).all()

def get_cursos_activos(db: Session):
    return db.query(Curso).filter(Curso.activo.is_(True)).order_by(Curso.id).all()

def buscar_cursos_por_nombre(db: Session, nombre: str):
    return db.query(Curso).filter(func.lower(Curso.nombre).like(f"%{nombre.lower()}%")).order_by(Curso.id).all()

def get_cursos_by_docente(db: Session, docente_id: int, solo_activos: bool = False):
    query = db.query(Curso).filter(Curso.docente_id == docente_id)
    if solo_activos:
        query = query.filter(Curso.activo.is_(True))
    return query.order_by(Curso.id).all()

def get_cursos_by_creditos(db: Session, creditos: int):
    return db.query(Curso).filter(Curso.creditos == creditos).order_by(Curso.id).all()

def get_cursos_con_min_creditos(db: Session, min_creditos: int):
    return db.query(Curso).filter(Curso.creditos >= min_creditos, Curso.activo.is_(True)).order_by(Curso.id).all()

def update_curso(db: Session, id: int, datos: CursoUpdate):
    curso = get_curso_by_id(db, id)
    if not curso:
        raise NotFoundError(RECURSO, id)

    if datos.codigo is not None and datos.codigo != curso.codigo:
        verificar_codigo_disponible(db, Curso, RECURSO, datos.codigo, excluir_id=id)
        curso.codigo = datos.codigo

    curso.nombre = datos.nombre
    curso.descripcion = datos.descripcion
    curso.creditos = datos.creditos
    curso.activo = datos.activo
    curso.docente = _resolver_docente(db, datos.id_docente)

    db.commit()
    db.refresh(curso)
    return curso

def asignar_docente(db: Session, id: int, id_docente: Optional[int]):
    """Sobrescribe el docente del curso; un docente puede dictar varios cursos."""
    curso = get_curso_by_id(db, id)
    if not curso:
        raise NotFoundError(RECURSO, id)
    curso.docente = _resolver_docente(db, id_docente)
    db.commit()
    db.refresh(curso)
    return curso

def _cambiar_estado(db: Session, id: int, activo: bool):
    curso = get_curso_by_id(db, id)
    if not curso:
        raise NotFoundError(RECURSO, id)
    curso.activo = activo
    db.commit()
    db.refresh(curso)
    return curso

def desactivar_curso(db: Session, id: int):
    return _cambiar_estado(db, id, False)

def activar_curso(db: Session, id: int):
    return _cambiar_estado(db, id, True)

def delete_curso(db: Session, id: int) -> None:
    curso = get_curso_by_id(db, id)
    if not curso:
        raise NotFoundError(RECURSO, id)
    db.delete(curso)
    db.commit()
    logger.info("Curso eliminado id=%s", id)

def contar_por_docente(db: Session):
    filas = db.query(Docente.id, Docente.nombres, Docente.apellidos, func.count(Curso.id)) \
        .join(Curso, Curso.docente_id == Docente.id) \
        .filter(Curso.activo.is_(True)) \
        .group_by(Docente.id, Docente.nombres, Docente.apellidos) \
        .order_by(Docente.id).all()
    return [
        {"docente_id": docente_id, "nombres": nombres, "apellidos": apellidos, "total": total}
        for docente_id, nombres, apellidos, total in filas
    ]
