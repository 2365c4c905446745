from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from gestion_notas.crud import crud_docente
from gestion_notas.db.session import get_db
from gestion_notas.schemas.docente import (
    ConteoEspecialidad,
    DocenteCompletoCreate,
    DocenteCreate,
    DocenteOut,
    DocenteUpdate,
    PerfilDocenteUpdate,
)

router = APIRouter()

@router.post("/docentes", response_model=DocenteOut, status_code=201)
def create_docente(docente: DocenteCreate, db: Session = Depends(get_db)):
    return crud_docente.create_docente(db, docente)

@router.post("/docentes/completo", response_model=DocenteOut, status_code=201)
def create_docente_completo(datos: DocenteCompletoCreate, db: Session = Depends(get_db)):
    return crud_docente.create_docente_completo(db, datos)

@router.get("/docentes", response_model=List[DocenteOut])
def list_docentes(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud_docente.get_all_docentes(db, skip, limit)

@router.get("/docentes/activos", response_model=List[DocenteOut])
def list_docentes_activos(db: Session = Depends(get_db)):
    return crud_docente.get_docentes_activos(db)

@router.get("/docentes/buscar", response_model=List[DocenteOut])
def buscar_docentes(nombre: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return crud_docente.buscar_docentes_por_nombre(db, nombre)

@router.get("/docentes/estadisticas/especialidad", response_model=List[ConteoEspecialidad])
def estadisticas_por_especialidad(db: Session = Depends(get_db)):
    return crud_docente.contar_por_especialidad(db)

@router.get("/docentes/especialidad/{especialidad}", response_model=List[DocenteOut])
def list_docentes_por_especialidad(especialidad: str, db: Session = Depends(get_db)):
    return crud_docente.get_docentes_by_especialidad(db, especialidad)

@router.get("/docentes/distrito/{distrito}", response_model=List[DocenteOut])
def list_docentes_por_distrito(distrito: str, db: Session = Depends(get_db)):
    return crud_docente.get_docentes_by_distrito(db, distrito)

@router.get("/docentes/usuario/{id_usuario}", response_model=DocenteOut)
def get_docente_por_usuario(id_usuario: int, db: Session = Depends(get_db)):
    docente = crud_docente.get_docente_by_usuario(db, id_usuario)
    if not docente:
        raise HTTPException(status_code=404, detail="Docente no encontrado")
    return docente

@router.get("/docentes/{id}", response_model=DocenteOut)
def get_docente(id: int, db: Session = Depends(get_db)):
    docente = crud_docente.get_docente_by_id(db, id)
    if not docente:
        raise HTTPException(status_code=404, detail="Docente no encontrado")
    return docente

@router.put("/docentes/{id}", response_model=DocenteOut)
def update_docente(id: int, datos: DocenteUpdate, db: Session = Depends(get_db)):
    return crud_docente.update_docente(db, id, datos)

@router.put("/docentes/{id}/perfil", response_model=DocenteOut)
def update_perfil_docente(id: int, datos: PerfilDocenteUpdate, db: Session = Depends(get_db)):
    return crud_docente.update_perfil_docente(db, id, datos)

@router.post("/docentes/{id}/foto", response_model=DocenteOut)
def update_foto_docente(id: int, foto: UploadFile = File(...), db: Session = Depends(get_db)):
    return crud_docente.update_foto_docente(db, id, foto)

@router.delete("/docentes/{id}", status_code=204)
def delete_docente(id: int, eliminar_usuario: Optional[bool] = None, db: Session = Depends(get_db)):
    crud_docente.delete_docente(db, id, eliminar_usuario)
