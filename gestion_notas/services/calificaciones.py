import enum
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

from sqlalchemy import Float, func
from sqlalchemy.orm import Session

from gestion_notas.core.exceptions import OutOfRangeError
from gestion_notas.models.nota import Nota, TipoEvaluacionEnum

# Escala vigesimal: 0.00 - 20.00, aprobado desde 11
NOTA_MINIMA = Decimal("0.00")
NOTA_MAXIMA = Decimal("20.00")
NOTA_APROBATORIA = Decimal("11.00")

class EstadoAcademicoEnum(str, enum.Enum):
    EXCELENTE = "EXCELENTE"
    MUY_BUENO = "MUY BUENO"
    BUENO = "BUENO"
    REGULAR = "REGULAR"
    DESAPROBADO = "DESAPROBADO"

# Limite inferior inclusivo de cada banda, evaluadas de arriba hacia abajo
BANDAS_ESTADO = (
    (18.0, EstadoAcademicoEnum.EXCELENTE),
    (16.0, EstadoAcademicoEnum.MUY_BUENO),
    (14.0, EstadoAcademicoEnum.BUENO),
    (11.0, EstadoAcademicoEnum.REGULAR),
)


def validar_valor_nota(valor) -> Decimal:
    """
    Comprueba que la nota este en [0.00, 20.00] y la devuelve con dos decimales.
    """
    decimal_valor = valor if isinstance(valor, Decimal) else Decimal(str(valor))
    if decimal_valor < NOTA_MINIMA or decimal_valor > NOTA_MAXIMA:
        raise OutOfRangeError(valor, NOTA_MINIMA, NOTA_MAXIMA)
    return decimal_valor.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _promedio(db: Session, *condiciones) -> float:
    promedio = db.query(func.avg(Nota.valor, type_=Float)).filter(*condiciones).scalar()
    return float(promedio) if promedio is not None else 0.0


def promedio_por_estudiante(db: Session, estudiante_id: int) -> float:
    return _promedio(db, Nota.estudiante_id == estudiante_id)


def promedio_por_curso(db: Session, curso_id: int) -> float:
    return _promedio(db, Nota.curso_id == curso_id)


def promedio_por_estudiante_y_curso(db: Session, estudiante_id: int, curso_id: int) -> float:
    return _promedio(db, Nota.estudiante_id == estudiante_id, Nota.curso_id == curso_id)


def clasificar_promedio(promedio: float) -> EstadoAcademicoEnum:
    for limite, estado in BANDAS_ESTADO:
        if promedio >= limite:
            return estado
    return EstadoAcademicoEnum.DESAPROBADO


def estado_academico(db: Session, estudiante_id: int, curso_id: int) -> EstadoAcademicoEnum:
    """Sin notas el promedio es 0.0, por lo que el estado es DESAPROBADO."""
    return clasificar_promedio(promedio_por_estudiante_y_curso(db, estudiante_id, curso_id))


def aprobo_curso(db: Session, estudiante_id: int, curso_id: int) -> bool:
    return promedio_por_estudiante_y_curso(db, estudiante_id, curso_id) >= float(NOTA_APROBATORIA)


def notas_con_minimo(db: Session, minimo) -> List[Nota]:
    umbral = minimo if isinstance(minimo, Decimal) else Decimal(str(minimo))
    return db.query(Nota).filter(Nota.valor >= umbral).order_by(Nota.id).all()


def notas_aprobatorias(db: Session) -> List[Nota]:
    return notas_con_minimo(db, NOTA_APROBATORIA)


def mejores_notas_por_curso(db: Session, curso_id: int, limite: int) -> List[Nota]:
    notas = db.query(Nota).filter(Nota.curso_id == curso_id) \
        .order_by(Nota.valor.desc(), Nota.id).all()
    return notas[:limite]


def contar_por_tipo_evaluacion(db: Session) -> Dict[TipoEvaluacionEnum, int]:
    filas = db.query(Nota.tipo_evaluacion, func.count(Nota.id)).group_by(Nota.tipo_evaluacion).all()
    return {tipo: total for tipo, total in filas}
