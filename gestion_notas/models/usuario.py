from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from gestion_notas.db.base_class import Base
import enum

class RolEnum(str, enum.Enum):
    ADMIN = "ADMIN"
    DOCENTE = "DOCENTE"
    ESTUDIANTE = "ESTUDIANTE"

class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    contrasena_hash = Column(String(255), nullable=False)
    rol = Column(Enum(RolEnum), nullable=False)
    activo = Column(Boolean, default=True, nullable=False)
    fecha_creacion = Column(DateTime, default=datetime.now, nullable=False)
