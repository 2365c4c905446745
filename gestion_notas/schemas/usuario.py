from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from gestion_notas.models.usuario import RolEnum

class UsuarioCreate(BaseModel):
    email: EmailStr
    contrasena: str = Field(..., min_length=6)
    # Texto libre; la ruta lo convierte a RolEnum
    rol: str

class UsuarioUpdate(BaseModel):
    email: Optional[EmailStr] = None
    contrasena: Optional[str] = Field(default=None, min_length=6)
    rol: Optional[str] = None
    activo: Optional[bool] = None

class UsuarioOut(BaseModel):
    id: int
    email: EmailStr
    rol: RolEnum
    activo: bool
    fecha_creacion: datetime

    class Config:
        from_attributes = True

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    usuario: UsuarioOut
    id_estudiante: Optional[int] = None
    id_docente: Optional[int] = None
