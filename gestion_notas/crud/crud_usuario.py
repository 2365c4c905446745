import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from gestion_notas.core.config import settings
from gestion_notas.core.exceptions import DuplicateEmailError, NotFoundError
from gestion_notas.core.security import generar_password_hash, verificar_password
from gestion_notas.models.docente import Docente
from gestion_notas.models.estudiante import Estudiante
from gestion_notas.models.usuario import Usuario, RolEnum

logger = logging.getLogger(__name__)

def get_usuario_by_id(db: Session, id: int):
    return db.query(Usuario).filter(Usuario.id == id).first()

def get_usuario_by_email(db: Session, email: str):
    return db.query(Usuario).filter(Usuario.email == email).first()

def get_all_usuarios(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Usuario).order_by(Usuario.id).offset(skip).limit(limit).all()

def get_usuarios_by_rol(db: Session, rol: RolEnum, solo_activos: bool = False):
    query = db.query(Usuario).filter(Usuario.rol == rol)
    if solo_activos:
        query = query.filter(Usuario.activo.is_(True))
    return query.order_by(Usuario.id).all()

def get_usuarios_activos(db: Session):
    return db.query(Usuario).filter(Usuario.activo.is_(True)).order_by(Usuario.id).all()

def verificar_email_disponible(db: Session, email: str, excluir_id: Optional[int] = None) -> None:
    query = db.query(Usuario).filter(Usuario.email == email)
    if excluir_id is not None:
        query = query.filter(Usuario.id != excluir_id)
    if query.first() is not None:
        raise DuplicateEmailError(email)

def build_usuario(db: Session, email: str, contrasena: str, rol: RolEnum) -> Usuario:
    """Valida y prepara un usuario nuevo sin confirmar la transaccion."""
    verificar_email_disponible(db, email)
    db_usuario = Usuario(
        email=email,
        contrasena_hash=generar_password_hash(contrasena),
        rol=rol,
        activo=True,
        fecha_creacion=datetime.now()
    )
    db.add(db_usuario)
    return db_usuario

def create_usuario(db: Session, email: str, contrasena: str, rol: RolEnum):
    db_usuario = build_usuario(db, email, contrasena, rol)
    db.commit()
    db.refresh(db_usuario)
    logger.info("Usuario creado id=%s rol=%s", db_usuario.id, db_usuario.rol.value)
    return db_usuario

def aplicar_email(db: Session, usuario: Usuario, email: str) -> None:
    if email != usuario.email:
        verificar_email_disponible(db, email, excluir_id=usuario.id)
        usuario.email = email

def update_usuario(db: Session, id: int, email: Optional[str] = None, contrasena: Optional[str] = None,
                   rol: Optional[RolEnum] = None, activo: Optional[bool] = None):
    usuario = get_usuario_by_id(db, id)
    if not usuario:
        raise NotFoundError("Usuario", id)

    if email is not None:
        aplicar_email(db, usuario, email)
    if contrasena is not None:
        usuario.contrasena_hash = generar_password_hash(contrasena)
    if rol is not None:
        usuario.rol = rol
    if activo is not None:
        usuario.activo = activo

    db.commit()
    db.refresh(usuario)
    return usuario

def _cambiar_estado(db: Session, id: int, activo: bool):
    usuario = get_usuario_by_id(db, id)
    if not usuario:
        raise NotFoundError("Usuario", id)
    usuario.activo = activo
    db.commit()
    db.refresh(usuario)
    return usuario

def desactivar_usuario(db: Session, id: int):
    return _cambiar_estado(db, id, False)

def activar_usuario(db: Session, id: int):
    return _cambiar_estado(db, id, True)

def delete_usuario(db: Session, id: int, cascada: Optional[bool] = None) -> None:
    """
    Elimina un usuario. Con ``cascada`` (por defecto CASCADA_ELIMINAR_USUARIO)
    tambien se eliminan el estudiante y el docente vinculados; sin ella los
    perfiles quedan sin usuario.
    """
    usuario = get_usuario_by_id(db, id)
    if not usuario:
        raise NotFoundError("Usuario", id)
    if cascada is None:
        cascada = settings.CASCADA_ELIMINAR_USUARIO

    eliminar_con_perfiles(db, usuario, cascada)
    db.commit()
    logger.info("Usuario eliminado id=%s", id)

def eliminar_con_perfiles(db: Session, usuario: Usuario, cascada: bool) -> None:
    """
    Marca el usuario para borrado sin confirmar la transaccion. Los perfiles que
    aun lo referencian se eliminan (``cascada``) o quedan sin usuario.
    """
    db.flush()
    perfiles = (
        db.query(Estudiante).filter(Estudiante.usuario_id == usuario.id).all()
        + db.query(Docente).filter(Docente.usuario_id == usuario.id).all()
    )
    for perfil in perfiles:
        if cascada:
            logger.info("Eliminando %s id=%s por cascada del usuario %s", type(perfil).__name__, perfil.id, usuario.id)
            db.delete(perfil)
        else:
            perfil.usuario = None

    db.delete(usuario)

def autenticar(db: Session, email: str, contrasena: str):
    usuario = get_usuario_by_email(db, email)
    if not usuario or not usuario.activo:
        return None
    if not verificar_password(contrasena, usuario.contrasena_hash):
        return None
    return usuario
