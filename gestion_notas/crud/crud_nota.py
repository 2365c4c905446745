import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from gestion_notas.core.exceptions import NotFoundError
from gestion_notas.models.curso import Curso
from gestion_notas.models.estudiante import Estudiante
from gestion_notas.models.nota import Nota, TipoEvaluacionEnum
from gestion_notas.services.calificaciones import validar_valor_nota

logger = logging.getLogger(__name__)

def create_nota(db: Session, estudiante: Estudiante, curso: Curso, valor: Decimal,
                tipo_evaluacion: Optional[TipoEvaluacionEnum] = None, observaciones: Optional[str] = None):
    """
    Registra una nota para un estudiante y curso ya resueltos por el llamador.
    """
    db_nota = Nota(
        estudiante=estudiante,
        curso=curso,
        valor=validar_valor_nota(valor),
        tipo_evaluacion=tipo_evaluacion or TipoEvaluacionEnum.PARCIAL,
        fecha_registro=datetime.now(),
        observaciones=observaciones
    )
    db.add(db_nota)
    db.commit()
    db.refresh(db_nota)
    logger.info("Nota creada id=%s estudiante=%s curso=%s", db_nota.id, estudiante.id, curso.id)
    return db_nota

def get_nota_by_id(db: Session, id: int):
    return db.query(Nota).filter(Nota.id == id).first()

def get_all_notas(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Nota).order_by(Nota.id).offset(skip).limit(limit).all()

def get_notas_by_estudiante(db: Session, estudiante_id: int):
    return db.query(Nota).filter(Nota.estudiante_id == estudiante_id).order_by(Nota.id).all()

def get_notas_by_curso(db: Session, curso_id: int):
    return db.query(Nota).filter(Nota.curso_id == curso_id).order_by(Nota.id).all()

def get_notas_by_estudiante_y_curso(db: Session, estudiante_id: int, curso_id: int):
    return db.query(Nota).filter(Nota.estudiante_id == estudiante_id, Nota.curso_id == curso_id) \
        .order_by(Nota.id).all()

def get_notas_by_tipo(db: Session, tipo_evaluacion: TipoEvaluacionEnum, estudiante_id: Optional[int] = None):
    query = db.query(Nota).filter(Nota.tipo_evaluacion == tipo_evaluacion)
    if estudiante_id is not None:
        query = query.filter(Nota.estudiante_id == estudiante_id)
    return query.order_by(Nota.id).all()

def update_nota(db: Session, id: int, valor: Decimal, tipo_evaluacion: Optional[TipoEvaluacionEnum],
                observaciones: Optional[str]):
    # estudiante, curso y fecha_registro no cambian
    nota = get_nota_by_id(db, id)
    if not nota:
        raise NotFoundError("Nota", id)

    nota.valor = validar_valor_nota(valor)
    if tipo_evaluacion is not None:
        nota.tipo_evaluacion = tipo_evaluacion
    nota.observaciones = observaciones

    db.commit()
    db.refresh(nota)
    return nota

def delete_nota(db: Session, id: int) -> None:
    nota = get_nota_by_id(db, id)
    if not nota:
        raise NotFoundError("Nota", id)
    db.delete(nota)
    db.commit()
    logger.info("Nota eliminada id=%s", id)
