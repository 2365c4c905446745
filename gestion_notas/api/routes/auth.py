from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordRequestForm
from gestion_notas.dependencies.auth import get_current_user
from gestion_notas.schemas.usuario import LoginResponse, UsuarioOut
from gestion_notas.db.session import get_db
from gestion_notas.models.usuario import Usuario
from gestion_notas.crud import crud_docente, crud_estudiante, crud_usuario
from gestion_notas.core.security import crear_token_para_usuario

router = APIRouter()

@router.post("/auth/login", response_model=LoginResponse)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    usuario = crud_usuario.autenticar(db, form_data.username, form_data.password)
    if not usuario:
        raise HTTPException(status_code=401, detail="Credenciales incorrectas")

    estudiante = crud_estudiante.get_estudiante_by_usuario(db, usuario.id)
    docente = crud_docente.get_docente_by_usuario(db, usuario.id)

    return LoginResponse(
        access_token=crear_token_para_usuario(usuario),
        usuario=UsuarioOut.model_validate(usuario),
        id_estudiante=estudiante.id if estudiante else None,
        id_docente=docente.id if docente else None,
    )

@router.get("/auth/me", response_model=UsuarioOut)
def obtener_usuario_actual(usuario: Usuario = Depends(get_current_user)):
    return usuario
