from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from gestion_notas.models.nota import TipoEvaluacionEnum

class NotaCreate(BaseModel):
    id_estudiante: int
    id_curso: int
    # El rango 0.00 - 20.00 lo valida el motor de calificaciones
    valor: Decimal
    tipo_evaluacion: Optional[str] = None
    observaciones: Optional[str] = None

class NotaUpdate(BaseModel):
    valor: Decimal
    tipo_evaluacion: Optional[str] = None
    observaciones: Optional[str] = None

class NotaOut(BaseModel):
    id: int
    estudiante_id: int
    curso_id: int
    valor: Decimal
    tipo_evaluacion: TipoEvaluacionEnum
    fecha_registro: datetime
    observaciones: Optional[str]
    estado_academico: Optional[str] = Field(
        default=None,
        description="Estado del estudiante en el curso de la nota",
    )

    class Config:
        from_attributes = True

class PromedioOut(BaseModel):
    promedio: float

class EstadoAcademicoOut(BaseModel):
    estudiante_id: int
    curso_id: int
    promedio: float
    estado: str
    aprobado: bool
