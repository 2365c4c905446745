from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gestion_notas.crud import crud_curso
from gestion_notas.db.session import get_db
from gestion_notas.schemas.curso import AsignarDocenteRequest, ConteoCursosDocente, CursoCreate, CursoOut, CursoUpdate

router = APIRouter()

@router.post("/cursos", response_model=CursoOut, status_code=201)
def create_curso(curso: CursoCreate, db: Session = Depends(get_db)):
    return crud_curso.create_curso(db, curso)

@router.get("/cursos", response_model=List[CursoOut])
def list_cursos(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud_curso.get_all_cursos(db, skip, limit)

@router.get("/cursos/activos", response_model=List[CursoOut])
def list_cursos_activos(db: Session = Depends(get_db)):
    return crud_curso.get_cursos_activos(db)

@router.get("/cursos/buscar", response_model=List[CursoOut])
def buscar_cursos(nombre: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return crud_curso.buscar_cursos_por_nombre(db, nombre)

@router.get("/cursos/estadisticas/docente", response_model=List[ConteoCursosDocente])
def estadisticas_por_docente(db: Session = Depends(get_db)):
    return crud_curso.contar_por_docente(db)

@router.get("/cursos/codigo/{codigo}", response_model=CursoOut)
def get_curso_por_codigo(codigo: str, db: Session = Depends(get_db)):
    curso = crud_curso.get_curso_by_codigo(db, codigo)
    if not curso:
        raise HTTPException(status_code=404, detail="Curso no encontrado")
    return curso

@router.get("/cursos/docente/{id_docente}", response_model=List[CursoOut])
def list_cursos_por_docente(id_docente: int, solo_activos: bool = False, db: Session = Depends(get_db)):
    return crud_curso.get_cursos_by_docente(db, id_docente, solo_activos)

@router.get("/cursos/creditos/{creditos}", response_model=List[CursoOut])
def list_cursos_por_creditos(creditos: int, db: Session = Depends(get_db)):
    return crud_curso.get_cursos_by_creditos(db, creditos)

@router.get("/cursos/creditos-minimos/{min_creditos}", response_model=List[CursoOut])
def list_cursos_con_min_creditos(min_creditos: int, db: Session = Depends(get_db)):
    return crud_curso.get_cursos_con_min_creditos(db, min_creditos)

@router.get("/cursos/{id}", response_model=CursoOut)
def get_curso(id: int, db: Session = Depends(get_db)):
    curso = crud_curso.get_curso_by_id(db, id)
    if not curso:
        raise HTTPException(status_code=404, detail="Curso no encontrado")
    return curso

@router.put("/cursos/{id}", response_model=CursoOut)
def update_curso(id: int, datos: CursoUpdate, db: Session = Depends(get_db)):
    return crud_curso.update_curso(db, id, datos)

@router.put("/cursos/{id}/docente", response_model=CursoOut)
def asignar_docente(id: int, datos: AsignarDocenteRequest, db: Session = Depends(get_db)):
    return crud_curso.asignar_docente(db, id, datos.id_docente)

@router.put("/cursos/{id}/desactivar", response_model=CursoOut)
def desactivar_curso(id: int, db: Session = Depends(get_db)):
    return crud_curso.desactivar_curso(db, id)

@router.put("/cursos/{id}/activar", response_model=CursoOut)
def activar_curso(id: int, db: Session = Depends(get_db)):
    return crud_curso.activar_curso(db, id)

@router.delete("/cursos/{id}", status_code=204)
def delete_curso(id: int, db: Session = Depends(get_db)):
    crud_curso.delete_curso(db, id)
