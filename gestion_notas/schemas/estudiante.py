from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

class EstudianteBase(BaseModel):
    nombres: str = Field(..., min_length=1, max_length=100)
    apellidos: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    telefono: Optional[str] = Field(default=None, max_length=20)
    direccion: Optional[str] = Field(default=None, max_length=200)
    distrito: Optional[str] = Field(default=None, max_length=100)
    foto: Optional[str] = Field(default=None, max_length=255)
    fecha_nacimiento: Optional[date] = None
    codigo: Optional[str] = Field(default=None, max_length=20)

class EstudianteCreate(EstudianteBase):
    id_usuario: Optional[int] = None

class EstudianteUpdate(EstudianteCreate):
    pass

class EstudianteCompletoCreate(EstudianteBase):
    """Alta de estudiante junto con su usuario de acceso."""
    email: EmailStr
    contrasena: str = Field(..., min_length=6)

class PerfilEstudianteUpdate(BaseModel):
    nombres: Optional[str] = Field(default=None, max_length=100)
    apellidos: Optional[str] = Field(default=None, max_length=100)
    telefono: Optional[str] = Field(default=None, max_length=20)
    direccion: Optional[str] = Field(default=None, max_length=200)
    distrito: Optional[str] = Field(default=None, max_length=100)
    foto: Optional[str] = Field(default=None, max_length=255)
    fecha_nacimiento: Optional[date] = None
    email: Optional[EmailStr] = None

class EstudianteOut(BaseModel):
    id: int
    nombres: str
    apellidos: str
    email: Optional[str]
    telefono: Optional[str]
    direccion: Optional[str]
    distrito: Optional[str]
    foto: Optional[str]
    fecha_nacimiento: Optional[date]
    codigo: Optional[str]
    usuario_id: Optional[int]

    class Config:
        from_attributes = True

class ConteoDistrito(BaseModel):
    distrito: Optional[str]
    total: int
