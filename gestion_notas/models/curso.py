from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from gestion_notas.db.base_class import Base

class Curso(Base):
    __tablename__ = "cursos"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    codigo = Column(String(20), unique=True, index=True)
    descripcion = Column(Text)
    creditos = Column(Integer, default=3, nullable=False)
    activo = Column(Boolean, default=True, nullable=False)

    docente_id = Column(Integer, ForeignKey("docentes.id"), nullable=True)
    docente = relationship("Docente", back_populates="cursos")

    notas = relationship("Nota", back_populates="curso", cascade="all, delete-orphan")
