import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "clave-de-pruebas"
os.environ.setdefault("CARGAR_DATOS_PRUEBA", "False")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gestion_notas.crud import crud_curso, crud_docente, crud_estudiante, crud_usuario
from gestion_notas.db.base import Base
from gestion_notas.db.session import get_db
from gestion_notas.main import app
from gestion_notas.models.usuario import RolEnum
from gestion_notas.schemas.curso import CursoCreate
from gestion_notas.schemas.docente import DocenteCreate
from gestion_notas.schemas.estudiante import EstudianteCreate

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api(db):
    """La aplicacion real con get_db apuntando a la sesion de prueba."""
    def override_get_db():
        try:
            yield db
        except Exception:
            db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def nuevo_usuario(db):
    def _crear(email="usuario@colegio.edu.pe", contrasena="secreta123", rol=RolEnum.ESTUDIANTE):
        return crud_usuario.create_usuario(db, email, contrasena, rol)
    return _crear


@pytest.fixture
def nuevo_estudiante(db):
    def _crear(nombres="Ana", apellidos="Garcia Torres", **kwargs):
        return crud_estudiante.create_estudiante(db, EstudianteCreate(nombres=nombres, apellidos=apellidos, **kwargs))
    return _crear


@pytest.fixture
def nuevo_docente(db):
    def _crear(nombres="Carlos", apellidos="Rodriguez Perez", **kwargs):
        return crud_docente.create_docente(db, DocenteCreate(nombres=nombres, apellidos=apellidos, **kwargs))
    return _crear


@pytest.fixture
def nuevo_curso(db):
    def _crear(nombre="Matematica I", **kwargs):
        return crud_curso.create_curso(db, CursoCreate(nombre=nombre, **kwargs))
    return _crear
