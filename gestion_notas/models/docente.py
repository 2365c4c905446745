from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from gestion_notas.db.base_class import Base

class Docente(Base):
    __tablename__ = "docentes"

    id = Column(Integer, primary_key=True, index=True)
    nombres = Column(String(100), nullable=False)
    apellidos = Column(String(100), nullable=False)
    telefono = Column(String(20))
    especialidad = Column(String(100))
    direccion = Column(String(200))
    distrito = Column(String(100))
    foto = Column(String(255))
    fecha_contratacion = Column(Date)
    codigo = Column(String(20), unique=True, index=True)

    usuario_id = Column(Integer, ForeignKey("usuarios.id"), unique=True, nullable=True)
    usuario = relationship("Usuario")

    cursos = relationship("Curso", back_populates="docente")

    @property
    def email(self):
        return self.usuario.email if self.usuario is not None else None
