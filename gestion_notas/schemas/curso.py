from typing import Optional

from pydantic import BaseModel, Field

class CursoCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=100)
    codigo: Optional[str] = Field(default=None, max_length=20)
    descripcion: Optional[str] = Field(default=None, max_length=1000)
    creditos: int = Field(default=3, gt=0)
    id_docente: Optional[int] = None

class CursoUpdate(CursoCreate):
    activo: bool = True

class AsignarDocenteRequest(BaseModel):
    id_docente: Optional[int] = None

class CursoOut(BaseModel):
    id: int
    nombre: str
    codigo: Optional[str]
    descripcion: Optional[str]
    creditos: int
    activo: bool
    docente_id: Optional[int]

    class Config:
        from_attributes = True

class ConteoCursosDocente(BaseModel):
    docente_id: int
    nombres: str
    apellidos: str
    total: int
