import pytest

from gestion_notas.core.config import settings
from gestion_notas.core.exceptions import DuplicateEmailError, NotFoundError
from gestion_notas.core.security import verificar_token, crear_token_para_usuario
from gestion_notas.crud import crud_docente, crud_estudiante, crud_usuario
from gestion_notas.db.init_db import crear_admin_por_defecto
from gestion_notas.models.docente import Docente
from gestion_notas.models.estudiante import Estudiante
from gestion_notas.models.usuario import RolEnum, Usuario


def test_crear_usuario_guarda_hash(nuevo_usuario):
    usuario = nuevo_usuario()

    assert usuario.activo is True
    assert usuario.contrasena_hash != "secreta123"
    assert usuario.fecha_creacion is not None


def test_email_duplicado(nuevo_usuario):
    nuevo_usuario()
    with pytest.raises(DuplicateEmailError) as exc_info:
        nuevo_usuario(rol=RolEnum.DOCENTE)
    assert exc_info.value.code == "EMAIL_DUPLICADO"


def test_actualizar_email_a_uno_ocupado(db, nuevo_usuario):
    nuevo_usuario(email="uno@colegio.edu.pe")
    dos = nuevo_usuario(email="dos@colegio.edu.pe")

    with pytest.raises(DuplicateEmailError):
        crud_usuario.update_usuario(db, dos.id, email="uno@colegio.edu.pe")
    # Reenviar el propio email no es un conflicto
    assert crud_usuario.update_usuario(db, dos.id, email="dos@colegio.edu.pe").email == "dos@colegio.edu.pe"


def test_filtrar_por_rol_y_estado(db, nuevo_usuario):
    nuevo_usuario(email="a@colegio.edu.pe", rol=RolEnum.DOCENTE)
    inactivo = nuevo_usuario(email="b@colegio.edu.pe", rol=RolEnum.DOCENTE)
    nuevo_usuario(email="c@colegio.edu.pe", rol=RolEnum.ADMIN)
    crud_usuario.desactivar_usuario(db, inactivo.id)

    assert len(crud_usuario.get_usuarios_by_rol(db, RolEnum.DOCENTE)) == 2
    assert len(crud_usuario.get_usuarios_by_rol(db, RolEnum.DOCENTE, solo_activos=True)) == 1
    assert len(crud_usuario.get_usuarios_activos(db)) == 2


def test_autenticar(db, nuevo_usuario):
    usuario = nuevo_usuario()

    assert crud_usuario.autenticar(db, usuario.email, "secreta123").id == usuario.id
    assert crud_usuario.autenticar(db, usuario.email, "otra") is None
    assert crud_usuario.autenticar(db, "nadie@colegio.edu.pe", "secreta123") is None

    crud_usuario.desactivar_usuario(db, usuario.id)
    assert crud_usuario.autenticar(db, usuario.email, "secreta123") is None


def test_token_contiene_identidad(nuevo_usuario):
    usuario = nuevo_usuario(rol=RolEnum.ADMIN)
    datos = verificar_token(crear_token_para_usuario(usuario))

    assert datos["sub"] == usuario.email
    assert datos["id"] == usuario.id
    assert datos["rol"] == "ADMIN"
    assert verificar_token("no-es-un-token") is None


def test_borrar_usuario_sin_cascada_desvincula_perfiles(db, nuevo_usuario, nuevo_estudiante, nuevo_docente):
    usuario = nuevo_usuario()
    estudiante = nuevo_estudiante(id_usuario=usuario.id)
    docente = nuevo_docente(id_usuario=usuario.id)

    crud_usuario.delete_usuario(db, usuario.id)

    assert db.query(Usuario).count() == 0
    db.refresh(estudiante)
    db.refresh(docente)
    assert estudiante.usuario_id is None
    assert docente.usuario_id is None


def test_borrar_usuario_con_cascada_configurada(db, monkeypatch, nuevo_usuario, nuevo_estudiante):
    monkeypatch.setattr(settings, "CASCADA_ELIMINAR_USUARIO", True)
    usuario = nuevo_usuario()
    nuevo_estudiante(id_usuario=usuario.id)

    crud_usuario.delete_usuario(db, usuario.id)

    assert db.query(Estudiante).count() == 0


def test_borrar_usuario_cascada_explicita(db, nuevo_usuario, nuevo_docente):
    usuario = nuevo_usuario(rol=RolEnum.DOCENTE)
    nuevo_docente(id_usuario=usuario.id)

    crud_usuario.delete_usuario(db, usuario.id, cascada=True)

    assert db.query(Docente).count() == 0


def test_borrar_perfil_conserva_usuario_por_defecto(db, nuevo_usuario, nuevo_estudiante):
    usuario = nuevo_usuario()
    estudiante = nuevo_estudiante(id_usuario=usuario.id)

    crud_estudiante.delete_estudiante(db, estudiante.id)

    assert crud_usuario.get_usuario_by_id(db, usuario.id) is not None


def test_borrar_perfil_con_su_usuario(db, monkeypatch, nuevo_usuario, nuevo_estudiante, nuevo_docente):
    monkeypatch.setattr(settings, "ELIMINAR_USUARIO_CON_PERFIL", True)
    alumno = nuevo_usuario(email="alumno@colegio.edu.pe")
    profe = nuevo_usuario(email="profe@colegio.edu.pe", rol=RolEnum.DOCENTE)
    estudiante = nuevo_estudiante(id_usuario=alumno.id)
    docente = nuevo_docente(id_usuario=profe.id)

    crud_estudiante.delete_estudiante(db, estudiante.id)
    crud_docente.delete_docente(db, docente.id)

    assert db.query(Usuario).count() == 0


def test_operaciones_sobre_usuario_inexistente(db):
    with pytest.raises(NotFoundError):
        crud_usuario.update_usuario(db, 10, activo=False)
    with pytest.raises(NotFoundError):
        crud_usuario.activar_usuario(db, 10)
    with pytest.raises(NotFoundError):
        crud_usuario.delete_usuario(db, 10)


def test_admin_por_defecto_se_crea_una_vez(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "admin@colegio.edu.pe")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "admin123")

    admin = crear_admin_por_defecto(db)

    assert admin.rol == RolEnum.ADMIN
    assert crear_admin_por_defecto(db) is None
    assert db.query(Usuario).count() == 1


def test_borrar_estudiante_con_cuenta_compartida_desvincula_al_docente(db, nuevo_usuario, nuevo_estudiante, nuevo_docente):
    usuario = nuevo_usuario()
    estudiante = nuevo_estudiante(id_usuario=usuario.id)
    docente = nuevo_docente(id_usuario=usuario.id)

    crud_estudiante.delete_estudiante(db, estudiante.id, eliminar_usuario=True)

    db.expire_all()
    assert crud_usuario.get_usuario_by_id(db, usuario.id) is None
    assert crud_docente.get_docente_by_id(db, docente.id).usuario_id is None


def test_borrar_docente_con_cuenta_compartida_desvincula_al_estudiante(db, nuevo_usuario, nuevo_estudiante, nuevo_docente):
    usuario = nuevo_usuario()
    estudiante = nuevo_estudiante(id_usuario=usuario.id)
    docente = nuevo_docente(id_usuario=usuario.id)

    crud_docente.delete_docente(db, docente.id, eliminar_usuario=True)

    db.expire_all()
    assert db.query(Usuario).count() == 0
    assert crud_estudiante.get_estudiante_by_id(db, estudiante.id).usuario_id is None
