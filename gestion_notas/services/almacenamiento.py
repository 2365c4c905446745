"""
Almacenamiento de fotos de perfil en disco.

Los archivos se guardan en ``UPLOAD_DIR/<categoria>/`` con un nombre unico
(uuid + extension original); la base de datos solo guarda ese nombre.
"""

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Optional

from gestion_notas.core.config import settings
from gestion_notas.core.exceptions import StorageError

logger = logging.getLogger(__name__)

CATEGORIA_ESTUDIANTES = "estudiantes"
CATEGORIA_DOCENTES = "docentes"


def _directorio(categoria: Optional[str]) -> Path:
    base = Path(settings.UPLOAD_DIR).resolve()
    if categoria and categoria.strip():
        return base / categoria.strip()
    return base


def guardar_archivo(archivo, categoria: Optional[str] = None) -> str:
    """
    Guarda un archivo subido (objeto con ``filename`` y ``file``) y devuelve
    el nombre generado, sin el subdirectorio.
    """
    extension = os.path.splitext(os.path.basename(archivo.filename or ""))[1]
    nombre = f"{uuid.uuid4()}{extension}"
    try:
        destino = _directorio(categoria)
        destino.mkdir(parents=True, exist_ok=True)
        with open(destino / nombre, "wb") as buffer:
            shutil.copyfileobj(archivo.file, buffer)
    except OSError as e:
        logger.error("No se pudo almacenar el archivo %s: %s", archivo.filename, e)
        raise StorageError("No se pudo almacenar el archivo.") from e
    logger.info("Archivo almacenado %s/%s", categoria, nombre)
    return nombre


def eliminar_archivo(nombre: Optional[str], categoria: Optional[str] = None) -> None:
    if not nombre or not nombre.strip():
        return
    ruta = _directorio(categoria) / os.path.basename(nombre)
    try:
        ruta.unlink(missing_ok=True)
    except OSError as e:
        raise StorageError("No se pudo eliminar el archivo.") from e
