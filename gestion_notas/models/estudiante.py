from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from gestion_notas.db.base_class import Base

class Estudiante(Base):
    __tablename__ = "estudiantes"

    id = Column(Integer, primary_key=True, index=True)
    nombres = Column(String(100), nullable=False)
    apellidos = Column(String(100), nullable=False)
    email = Column(String(100))
    telefono = Column(String(20))
    direccion = Column(String(200))
    distrito = Column(String(100))
    foto = Column(String(255))
    fecha_nacimiento = Column(Date)
    codigo = Column(String(20), unique=True, index=True)

    # 0..1 usuario, y un usuario respalda a lo sumo un estudiante
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), unique=True, nullable=True)
    usuario = relationship("Usuario")

    notas = relationship("Nota", back_populates="estudiante", cascade="all, delete-orphan")
