import enum
from typing import Type, TypeVar

from gestion_notas.core.exceptions import InvalidEnumError

E = TypeVar("E", bound=enum.Enum)


def parsear_enum(enum_cls: Type[E], valor, campo: str) -> E:
    """
    Convierte texto libre de la capa HTTP en el miembro del enum.
    Acepta mayusculas o minusculas; cualquier otro valor es InvalidEnumError.
    """
    if isinstance(valor, enum_cls):
        return valor
    texto = str(valor).strip().upper() if valor is not None else ""
    for miembro in enum_cls:
        if miembro.value == texto or miembro.name == texto:
            return miembro
    raise InvalidEnumError(campo, valor, [m.value for m in enum_cls])
