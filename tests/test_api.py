from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from gestion_notas.crud import crud_estudiante, crud_nota
from gestion_notas.models.usuario import RolEnum


def _cliente(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_crear_estudiante_y_consultarlo(api):
    async with _cliente(api) as client:
        creado = await client.post("/api/estudiantes", json={"nombres": "Ana", "apellidos": "Garcia"})
        por_codigo = await client.get(f"/api/estudiantes/codigo/{creado.json()['codigo']}")

    assert creado.status_code == 201
    assert creado.json()["codigo"] == "EST000001"
    assert por_codigo.status_code == 200
    assert por_codigo.json()["id"] == creado.json()["id"]


@pytest.mark.asyncio
async def test_codigo_duplicado_devuelve_409(api, nuevo_estudiante):
    nuevo_estudiante(codigo="EST-1")

    async with _cliente(api) as client:
        response = await client.post("/api/estudiantes", json={"nombres": "Luis", "apellidos": "R", "codigo": "EST-1"})

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "CODIGO_DUPLICADO"


@pytest.mark.asyncio
async def test_recursos_inexistentes(api):
    async with _cliente(api) as client:
        consulta = await client.get("/api/estudiantes/999")
        actualizacion = await client.put("/api/cursos/999", json={"nombre": "X"})
        borrado = await client.delete("/api/notas/999")

    assert consulta.status_code == 404
    assert actualizacion.status_code == 404
    assert actualizacion.json()["detail"]["code"] == "CURSO_NO_ENCONTRADO"
    assert borrado.status_code == 404


@pytest.mark.asyncio
async def test_rol_invalido_devuelve_400(api):
    async with _cliente(api) as client:
        alta = await client.post("/api/usuarios", json={
            "email": "x@colegio.edu.pe", "contrasena": "secreta123", "rol": "PROFESOR",
        })
        filtro = await client.get("/api/usuarios/rol/profesor")
        valido = await client.get("/api/usuarios/rol/docente")

    assert alta.status_code == 400
    assert alta.json()["detail"]["code"] == "VALOR_INVALIDO"
    assert alta.json()["detail"]["details"]["permitidos"] == ["ADMIN", "DOCENTE", "ESTUDIANTE"]
    assert filtro.status_code == 400
    assert valido.status_code == 200


@pytest.mark.asyncio
async def test_nota_con_estudiante_o_curso_inexistente(api, nuevo_estudiante, nuevo_curso):
    estudiante = nuevo_estudiante()
    curso = nuevo_curso()

    async with _cliente(api) as client:
        sin_estudiante = await client.post("/api/notas", json={"id_estudiante": 50, "id_curso": curso.id, "valor": 12})
        sin_curso = await client.post("/api/notas", json={"id_estudiante": estudiante.id, "id_curso": 50, "valor": 12})

    assert sin_estudiante.status_code == 400
    assert sin_curso.status_code == 400


@pytest.mark.asyncio
async def test_nota_fuera_de_rango_y_tipo_invalido(api, nuevo_estudiante, nuevo_curso):
    base = {"id_estudiante": nuevo_estudiante().id, "id_curso": nuevo_curso().id}

    async with _cliente(api) as client:
        fuera = await client.post("/api/notas", json={**base, "valor": 20.5})
        tipo = await client.post("/api/notas", json={**base, "valor": 15, "tipo_evaluacion": "QUIZ"})

    assert fuera.status_code == 400
    assert fuera.json()["detail"]["code"] == "NOTA_FUERA_DE_RANGO"
    assert tipo.status_code == 400
    assert tipo.json()["detail"]["details"]["campo"] == "tipo_evaluacion"


@pytest.mark.asyncio
async def test_nota_incluye_estado_academico(api, nuevo_estudiante, nuevo_curso):
    base = {"id_estudiante": nuevo_estudiante().id, "id_curso": nuevo_curso().id}

    async with _cliente(api) as client:
        primera = await client.post("/api/notas", json={**base, "valor": 18, "tipo_evaluacion": "tarea"})
        segunda = await client.post("/api/notas", json={**base, "valor": 15})
        estado = await client.get(f"/api/notas/estado/estudiante/{base['id_estudiante']}/curso/{base['id_curso']}")
        conteo = await client.get("/api/notas/estadisticas/tipo")

    assert primera.status_code == 201
    assert primera.json()["tipo_evaluacion"] == "TAREA"
    assert primera.json()["estado_academico"] == "EXCELENTE"
    assert segunda.json()["tipo_evaluacion"] == "PARCIAL"
    assert segunda.json()["estado_academico"] == "MUY BUENO"
    assert estado.json() == {
        "estudiante_id": base["id_estudiante"],
        "curso_id": base["id_curso"],
        "promedio": 16.5,
        "estado": "MUY BUENO",
        "aprobado": True,
    }
    assert conteo.json() == {"TAREA": 1, "PARCIAL": 1}


@pytest.mark.asyncio
async def test_mejores_notas_y_promedio(api, db, nuevo_estudiante, nuevo_curso):
    estudiante = nuevo_estudiante()
    curso = nuevo_curso()
    for valor in ("11", "19", "14"):
        crud_nota.create_nota(db, estudiante, curso, Decimal(valor))

    async with _cliente(api) as client:
        mejores = await client.get(f"/api/notas/mejores/curso/{curso.id}", params={"limite": 2})
        promedio = await client.get(f"/api/notas/promedio/curso/{curso.id}")
        vacio = await client.get("/api/notas/promedio/curso/999")

    assert [Decimal(n["valor"]) for n in mejores.json()] == [Decimal("19"), Decimal("14")]
    assert promedio.json() == {"promedio": pytest.approx(44 / 3)}
    assert vacio.json() == {"promedio": 0.0}


@pytest.mark.asyncio
async def test_conflicto_de_unicidad_en_la_base_devuelve_409(api, monkeypatch, nuevo_estudiante):
    nuevo_estudiante(codigo="EST-1")
    # Simula dos altas concurrentes que pasaron la verificacion previa
    monkeypatch.setattr(crud_estudiante, "verificar_codigo_disponible", lambda *args, **kwargs: None)

    async with _cliente(api) as client:
        response = await client.post("/api/estudiantes", json={"nombres": "Luis", "apellidos": "R", "codigo": "EST-1"})

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "CONFLICTO_UNICIDAD"


@pytest.mark.asyncio
async def test_login_y_usuario_actual(api, db, nuevo_usuario, nuevo_estudiante):
    usuario = nuevo_usuario(email="ana@colegio.edu.pe")
    estudiante = nuevo_estudiante(id_usuario=usuario.id)

    async with _cliente(api) as client:
        login = await client.post("/api/auth/login", data={"username": "ana@colegio.edu.pe", "password": "secreta123"})
        token = login.json()["access_token"]
        yo = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert login.status_code == 200
    assert login.json()["id_estudiante"] == estudiante.id
    assert login.json()["id_docente"] is None
    assert yo.json()["email"] == "ana@colegio.edu.pe"


@pytest.mark.asyncio
async def test_login_rechazado(api, db, nuevo_usuario):
    usuario = nuevo_usuario(email="luis@colegio.edu.pe", rol=RolEnum.DOCENTE)

    async with _cliente(api) as client:
        mala_clave = await client.post("/api/auth/login", data={"username": usuario.email, "password": "incorrecta"})
        await client.put(f"/api/usuarios/{usuario.id}/desactivar")
        inactivo = await client.post("/api/auth/login", data={"username": usuario.email, "password": "secreta123"})
        sin_token = await client.get("/api/auth/me")

    assert mala_clave.status_code == 401
    assert inactivo.status_code == 401
    assert sin_token.status_code == 401


@pytest.mark.asyncio
async def test_borrar_curso_devuelve_204(api, nuevo_curso):
    curso = nuevo_curso()

    async with _cliente(api) as client:
        borrado = await client.delete(f"/api/cursos/{curso.id}")
        consulta = await client.get(f"/api/cursos/{curso.id}")

    assert borrado.status_code == 204
    assert consulta.status_code == 404
