"""
Reglas de consistencia compartidas por los registros de Estudiante, Docente y Curso.

- Codigos legibles unicos por tipo de entidad.
- Codigos generados como PREFIJO + secuencia rellenada con ceros, partiendo de
  ``count() + 1``. Tras borrados ese numero puede estar ocupado, asi que se
  avanza hasta el primero libre.
- Un Usuario respalda como maximo un perfil de cada tipo.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from gestion_notas.core.exceptions import AccountAlreadyBoundError, DuplicateCodeError, NotFoundError
from gestion_notas.models.usuario import Usuario

logger = logging.getLogger(__name__)


def codigo_en_uso(db: Session, modelo, codigo: str, excluir_id: Optional[int] = None) -> bool:
    query = db.query(modelo).filter(modelo.codigo == codigo)
    if excluir_id is not None:
        query = query.filter(modelo.id != excluir_id)
    return db.query(query.exists()).scalar()


def verificar_codigo_disponible(db: Session, modelo, recurso: str, codigo: Optional[str],
                                excluir_id: Optional[int] = None) -> None:
    if codigo is not None and codigo_en_uso(db, modelo, codigo, excluir_id):
        raise DuplicateCodeError(recurso, codigo)


def generar_codigo(db: Session, modelo, prefijo: str, digitos: int) -> str:
    # TODO: la lectura de count() no es atomica; dos altas simultaneas pueden
    # calcular el mismo numero y una terminara en IntegrityError (409).
    secuencia = db.query(modelo).count() + 1
    codigo = f"{prefijo}{secuencia:0{digitos}d}"
    while codigo_en_uso(db, modelo, codigo):
        secuencia += 1
        codigo = f"{prefijo}{secuencia:0{digitos}d}"
    return codigo


def resolver_usuario_libre(db: Session, modelo, recurso: str, usuario_id: int,
                           excluir_id: Optional[int] = None) -> Usuario:
    """Devuelve el usuario si existe y ningun otro perfil del mismo tipo lo referencia."""
    usuario = db.query(Usuario).filter(Usuario.id == usuario_id).first()
    if not usuario:
        raise NotFoundError("Usuario", usuario_id)

    query = db.query(modelo).filter(modelo.usuario_id == usuario_id)
    if excluir_id is not None:
        query = query.filter(modelo.id != excluir_id)
    if query.first() is not None:
        logger.info("Usuario %s ya vinculado a otro %s", usuario_id, recurso.lower())
        raise AccountAlreadyBoundError(recurso, usuario_id)
    return usuario
