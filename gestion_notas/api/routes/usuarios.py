from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gestion_notas.core.enums import parsear_enum
from gestion_notas.crud import crud_usuario
from gestion_notas.db.session import get_db
from gestion_notas.models.usuario import RolEnum
from gestion_notas.schemas.usuario import UsuarioCreate, UsuarioOut, UsuarioUpdate

router = APIRouter()

@router.post("/usuarios", response_model=UsuarioOut, status_code=201)
def create_usuario(usuario: UsuarioCreate, db: Session = Depends(get_db)):
    rol = parsear_enum(RolEnum, usuario.rol, "rol")
    return crud_usuario.create_usuario(db, usuario.email, usuario.contrasena, rol)

@router.get("/usuarios", response_model=List[UsuarioOut])
def list_usuarios(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud_usuario.get_all_usuarios(db, skip, limit)

@router.get("/usuarios/activos", response_model=List[UsuarioOut])
def list_usuarios_activos(db: Session = Depends(get_db)):
    return crud_usuario.get_usuarios_activos(db)

@router.get("/usuarios/rol/{rol}", response_model=List[UsuarioOut])
def list_usuarios_por_rol(rol: str, solo_activos: bool = False, db: Session = Depends(get_db)):
    return crud_usuario.get_usuarios_by_rol(db, parsear_enum(RolEnum, rol, "rol"), solo_activos)

@router.get("/usuarios/{id}", response_model=UsuarioOut)
def get_usuario(id: int, db: Session = Depends(get_db)):
    usuario = crud_usuario.get_usuario_by_id(db, id)
    if not usuario:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    return usuario

@router.put("/usuarios/{id}", response_model=UsuarioOut)
def update_usuario(id: int, datos: UsuarioUpdate, db: Session = Depends(get_db)):
    rol = parsear_enum(RolEnum, datos.rol, "rol") if datos.rol is not None else None
    return crud_usuario.update_usuario(db, id, datos.email, datos.contrasena, rol, datos.activo)

@router.put("/usuarios/{id}/desactivar", response_model=UsuarioOut)
def desactivar_usuario(id: int, db: Session = Depends(get_db)):
    return crud_usuario.desactivar_usuario(db, id)

@router.put("/usuarios/{id}/activar", response_model=UsuarioOut)
def activar_usuario(id: int, db: Session = Depends(get_db)):
    return crud_usuario.activar_usuario(db, id)

@router.delete("/usuarios/{id}", status_code=204)
def delete_usuario(
    id: int,
    cascada: Optional[bool] = Query(default=None, description="Eliminar tambien los perfiles vinculados"),
    db: Session = Depends(get_db)
):
    crud_usuario.delete_usuario(db, id, cascada)
