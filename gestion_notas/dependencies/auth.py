from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from gestion_notas.db.session import get_db
from gestion_notas.core.security import verificar_token
from gestion_notas.crud import crud_usuario
from gestion_notas.models.usuario import Usuario

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Usuario:
    credenciales = verificar_token(token)
    if not credenciales:
        raise HTTPException(status_code=401, detail="Token inválido o expirado")

    usuario = crud_usuario.get_usuario_by_id(db, credenciales.get("id"))
    if not usuario:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    if not usuario.activo:
        raise HTTPException(status_code=403, detail="Usuario desactivado")

    return usuario
