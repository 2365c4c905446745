from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

class DocenteBase(BaseModel):
    nombres: str = Field(..., min_length=1, max_length=100)
    apellidos: str = Field(..., min_length=1, max_length=100)
    telefono: Optional[str] = Field(default=None, max_length=20)
    especialidad: Optional[str] = Field(default=None, max_length=100)
    direccion: Optional[str] = Field(default=None, max_length=200)
    distrito: Optional[str] = Field(default=None, max_length=100)
    foto: Optional[str] = Field(default=None, max_length=255)
    fecha_contratacion: Optional[date] = None
    codigo: Optional[str] = Field(default=None, max_length=20)

class DocenteCreate(DocenteBase):
    id_usuario: Optional[int] = None

class DocenteUpdate(DocenteCreate):
    pass

class DocenteCompletoCreate(DocenteBase):
    email: EmailStr
    contrasena: str = Field(..., min_length=6)

class PerfilDocenteUpdate(BaseModel):
    nombres: Optional[str] = Field(default=None, max_length=100)
    apellidos: Optional[str] = Field(default=None, max_length=100)
    telefono: Optional[str] = Field(default=None, max_length=20)
    especialidad: Optional[str] = Field(default=None, max_length=100)
    direccion: Optional[str] = Field(default=None, max_length=200)
    distrito: Optional[str] = Field(default=None, max_length=100)
    foto: Optional[str] = Field(default=None, max_length=255)
    fecha_contratacion: Optional[date] = None
    email: Optional[EmailStr] = None

class DocenteOut(BaseModel):
    id: int
    nombres: str
    apellidos: str
    email: Optional[str]
    telefono: Optional[str]
    especialidad: Optional[str]
    direccion: Optional[str]
    distrito: Optional[str]
    foto: Optional[str]
    fecha_contratacion: Optional[date]
    codigo: Optional[str]
    usuario_id: Optional[int]

    class Config:
        from_attributes = True

class ConteoEspecialidad(BaseModel):
    especialidad: Optional[str]
    total: int
