"""
Errores de dominio de Gestion de Notas
======================================

Todas las operaciones de registro y calificacion fallan con una subclase de
``GestionNotasError``. Cada error conoce su codigo HTTP; ``main.py`` registra
un manejador que los traduce a respuestas JSON, de modo que crud y servicios
nunca dependen de FastAPI.

Uso:
    from gestion_notas.core.exceptions import NotFoundError

    curso = get_curso_by_id(db, id)
    if not curso:
        raise NotFoundError("Curso", id)
"""

from typing import Any, Dict, Optional


class GestionNotasError(Exception):
    """Base de todos los errores esperados del dominio"""

    status_code = 400

    def __init__(
        self,
        message: str,
        code: str = "ERROR_VALIDACION",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(GestionNotasError):
    status_code = 404

    def __init__(self, recurso: str, recurso_id: Any):
        super().__init__(
            f"{recurso} no encontrado con ID: {recurso_id}",
            code=f"{recurso.upper()}_NO_ENCONTRADO",
            details={"recurso": recurso, "id": recurso_id}
        )


class DuplicateCodeError(GestionNotasError):
    status_code = 409

    def __init__(self, recurso: str, codigo: str):
        super().__init__(
            f"El codigo de {recurso.lower()} ya existe: {codigo}",
            code="CODIGO_DUPLICADO",
            details={"recurso": recurso, "codigo": codigo}
        )


class DuplicateEmailError(GestionNotasError):
    status_code = 409

    def __init__(self, email: str):
        super().__init__(
            f"El correo electronico ya esta registrado: {email}",
            code="EMAIL_DUPLICADO",
            details={"email": email}
        )


class AccountAlreadyBoundError(GestionNotasError):
    status_code = 409

    def __init__(self, recurso: str, usuario_id: int):
        super().__init__(
            f"El usuario ya tiene un {recurso.lower()} asignado",
            code="USUARIO_YA_ASIGNADO",
            details={"recurso": recurso, "usuario_id": usuario_id}
        )


class OutOfRangeError(GestionNotasError):
    def __init__(self, valor: Any, minimo: Any, maximo: Any):
        super().__init__(
            f"La nota debe estar entre {minimo} y {maximo}",
            code="NOTA_FUERA_DE_RANGO",
            details={"valor": str(valor), "minimo": str(minimo), "maximo": str(maximo)}
        )


class InvalidEnumError(GestionNotasError):
    def __init__(self, campo: str, recibido: Any, permitidos: list):
        super().__init__(
            f"Valor invalido para {campo}: {recibido}",
            code="VALOR_INVALIDO",
            details={"campo": campo, "recibido": recibido, "permitidos": permitidos}
        )


class StorageError(GestionNotasError):
    """El almacenamiento de archivos no pudo guardar el archivo"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="ERROR_ALMACENAMIENTO")
