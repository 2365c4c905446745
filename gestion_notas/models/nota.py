from datetime import datetime
from sqlalchemy import Column, Integer, Numeric, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from gestion_notas.db.base_class import Base
import enum

class TipoEvaluacionEnum(str, enum.Enum):
    PARCIAL = "PARCIAL"
    FINAL = "FINAL"
    TAREA = "TAREA"
    PRACTICA = "PRACTICA"
    EXAMEN = "EXAMEN"

class Nota(Base):
    __tablename__ = "notas"

    id = Column(Integer, primary_key=True, index=True)

    estudiante_id = Column(Integer, ForeignKey("estudiantes.id"), nullable=False, index=True)
    curso_id = Column(Integer, ForeignKey("cursos.id"), nullable=False, index=True)

    valor = Column(Numeric(4, 2), nullable=False)
    tipo_evaluacion = Column(Enum(TipoEvaluacionEnum), default=TipoEvaluacionEnum.PARCIAL, nullable=False)
    # Se fija al crear la nota y nunca se actualiza
    fecha_registro = Column(DateTime, default=datetime.now, nullable=False)
    observaciones = Column(Text)

    estudiante = relationship("Estudiante", back_populates="notas")
    curso = relationship("Curso", back_populates="notas")
