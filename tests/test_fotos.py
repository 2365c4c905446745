import io
from types import SimpleNamespace

import pytest

from gestion_notas.core.config import settings
from gestion_notas.core.exceptions import StorageError
from gestion_notas.crud import crud_docente, crud_estudiante
from gestion_notas.services import almacenamiento


def _archivo(nombre="foto.png", contenido=b"\x89PNG datos"):
    return SimpleNamespace(filename=nombre, file=io.BytesIO(contenido))


@pytest.fixture(autouse=True)
def directorio_subidas(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


def test_guardar_archivo_conserva_extension(directorio_subidas):
    nombre = almacenamiento.guardar_archivo(_archivo(), almacenamiento.CATEGORIA_ESTUDIANTES)

    assert nombre.endswith(".png")
    assert (directorio_subidas / "estudiantes" / nombre).read_bytes() == b"\x89PNG datos"


def test_eliminar_archivo_inexistente_no_falla():
    almacenamiento.eliminar_archivo("no-existe.png", almacenamiento.CATEGORIA_DOCENTES)
    almacenamiento.eliminar_archivo(None)


def test_reemplazar_foto_borra_la_anterior(db, directorio_subidas, nuevo_estudiante):
    estudiante = nuevo_estudiante()

    primera = crud_estudiante.update_foto_estudiante(db, estudiante.id, _archivo()).foto
    segunda = crud_estudiante.update_foto_estudiante(db, estudiante.id, _archivo("nueva.jpg")).foto

    carpeta = directorio_subidas / "estudiantes"
    assert segunda != primera
    assert segunda.endswith(".jpg")
    assert not (carpeta / primera).exists()
    assert (carpeta / segunda).exists()


def test_fallo_al_guardar_no_toca_la_foto_actual(db, monkeypatch, nuevo_docente):
    docente = crud_docente.update_foto_docente(db, nuevo_docente().id, _archivo())
    actual = docente.foto

    def guardar_roto(archivo, categoria=None):
        raise StorageError("disco lleno")

    monkeypatch.setattr(almacenamiento, "guardar_archivo", guardar_roto)

    with pytest.raises(StorageError):
        crud_docente.update_foto_docente(db, docente.id, _archivo())
    db.refresh(docente)
    assert docente.foto == actual


def test_fallo_al_borrar_la_anterior_no_aborta(db, monkeypatch, nuevo_estudiante):
    estudiante = nuevo_estudiante(foto="vieja.png")

    def eliminar_roto(nombre, categoria=None):
        raise StorageError("permiso denegado")

    monkeypatch.setattr(almacenamiento, "eliminar_archivo", eliminar_roto)

    actualizado = crud_estudiante.update_foto_estudiante(db, estudiante.id, _archivo())

    assert actualizado.foto != "vieja.png"


def test_commit_fallido_conserva_la_foto_anterior(db, monkeypatch, directorio_subidas, nuevo_estudiante):
    estudiante = crud_estudiante.update_foto_estudiante(db, nuevo_estudiante().id, _archivo())
    anterior = estudiante.foto
    eliminados = []

    def commit_roto():
        raise RuntimeError("conexion perdida")

    monkeypatch.setattr(db, "commit", commit_roto)
    monkeypatch.setattr(almacenamiento, "eliminar_archivo", lambda nombre, categoria=None: eliminados.append(nombre))

    with pytest.raises(RuntimeError):
        crud_estudiante.update_foto_estudiante(db, estudiante.id, _archivo("nueva.jpg"))

    assert eliminados == []
    assert (directorio_subidas / "estudiantes" / anterior).exists()
