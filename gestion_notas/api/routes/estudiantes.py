from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from gestion_notas.crud import crud_estudiante
from gestion_notas.db.session import get_db
from gestion_notas.schemas.estudiante import (
    ConteoDistrito,
    EstudianteCompletoCreate,
    EstudianteCreate,
    EstudianteOut,
    EstudianteUpdate,
    PerfilEstudianteUpdate,
)

router = APIRouter()

@router.post("/estudiantes", response_model=EstudianteOut, status_code=201)
def create_estudiante(estudiante: EstudianteCreate, db: Session = Depends(get_db)):
    return crud_estudiante.create_estudiante(db, estudiante)

@router.post("/estudiantes/completo", response_model=EstudianteOut, status_code=201)
def create_estudiante_completo(datos: EstudianteCompletoCreate, db: Session = Depends(get_db)):
    return crud_estudiante.create_estudiante_completo(db, datos)

@router.get("/estudiantes", response_model=List[EstudianteOut])
def list_estudiantes(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud_estudiante.get_all_estudiantes(db, skip, limit)

@router.get("/estudiantes/buscar", response_model=List[EstudianteOut])
def buscar_estudiantes(nombre: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return crud_estudiante.buscar_estudiantes_por_nombre(db, nombre)

@router.get("/estudiantes/estadisticas/distrito", response_model=List[ConteoDistrito])
def estadisticas_por_distrito(db: Session = Depends(get_db)):
    return crud_estudiante.contar_por_distrito(db)

@router.get("/estudiantes/codigo/{codigo}", response_model=EstudianteOut)
def get_estudiante_por_codigo(codigo: str, db: Session = Depends(get_db)):
    estudiante = crud_estudiante.get_estudiante_by_codigo(db, codigo)
    if not estudiante:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    return estudiante

@router.get("/estudiantes/usuario/{id_usuario}", response_model=EstudianteOut)
def get_estudiante_por_usuario(id_usuario: int, db: Session = Depends(get_db)):
    estudiante = crud_estudiante.get_estudiante_by_usuario(db, id_usuario)
    if not estudiante:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    return estudiante

@router.get("/estudiantes/distrito/{distrito}", response_model=List[EstudianteOut])
def list_estudiantes_por_distrito(distrito: str, db: Session = Depends(get_db)):
    return crud_estudiante.get_estudiantes_by_distrito(db, distrito)

@router.get("/estudiantes/{id}", response_model=EstudianteOut)
def get_estudiante(id: int, db: Session = Depends(get_db)):
    estudiante = crud_estudiante.get_estudiante_by_id(db, id)
    if not estudiante:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    return estudiante

@router.put("/estudiantes/{id}", response_model=EstudianteOut)
def update_estudiante(id: int, datos: EstudianteUpdate, db: Session = Depends(get_db)):
    return crud_estudiante.update_estudiante(db, id, datos)

@router.put("/estudiantes/{id}/perfil", response_model=EstudianteOut)
def update_perfil_estudiante(id: int, datos: PerfilEstudianteUpdate, db: Session = Depends(get_db)):
    return crud_estudiante.update_perfil_estudiante(db, id, datos)

@router.post("/estudiantes/{id}/foto", response_model=EstudianteOut)
def update_foto_estudiante(id: int, foto: UploadFile = File(...), db: Session = Depends(get_db)):
    return crud_estudiante.update_foto_estudiante(db, id, foto)

@router.delete("/estudiantes/{id}", status_code=204)
def delete_estudiante(id: int, eliminar_usuario: Optional[bool] = None, db: Session = Depends(get_db)):
    crud_estudiante.delete_estudiante(db, id, eliminar_usuario)
