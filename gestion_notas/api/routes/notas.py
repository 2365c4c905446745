from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gestion_notas.core.enums import parsear_enum
from gestion_notas.crud import crud_curso, crud_estudiante, crud_nota
from gestion_notas.db.session import get_db
from gestion_notas.models.nota import Nota, TipoEvaluacionEnum
from gestion_notas.schemas.nota import EstadoAcademicoOut, NotaCreate, NotaOut, NotaUpdate, PromedioOut
from gestion_notas.services import calificaciones

router = APIRouter()

def _tipo(valor: Optional[str]) -> Optional[TipoEvaluacionEnum]:
    if valor is None:
        return None
    return parsear_enum(TipoEvaluacionEnum, valor, "tipo_evaluacion")

def _con_estado(db: Session, nota: Nota) -> NotaOut:
    estado = calificaciones.estado_academico(db, nota.estudiante_id, nota.curso_id)
    return NotaOut.model_validate(nota).model_copy(update={"estado_academico": estado.value})

def _lista(db: Session, notas: List[Nota]) -> List[NotaOut]:
    return [_con_estado(db, nota) for nota in notas]

@router.post("/notas", response_model=NotaOut, status_code=201)
def create_nota(datos: NotaCreate, db: Session = Depends(get_db)):
    estudiante = crud_estudiante.get_estudiante_by_id(db, datos.id_estudiante)
    if not estudiante:
        raise HTTPException(status_code=400, detail="Estudiante no encontrado")
    curso = crud_curso.get_curso_by_id(db, datos.id_curso)
    if not curso:
        raise HTTPException(status_code=400, detail="Curso no encontrado")

    nota = crud_nota.create_nota(
        db, estudiante, curso, datos.valor, _tipo(datos.tipo_evaluacion), datos.observaciones
    )
    return _con_estado(db, nota)

@router.get("/notas", response_model=List[NotaOut])
def list_notas(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return _lista(db, crud_nota.get_all_notas(db, skip, limit))

@router.get("/notas/aprobatorias", response_model=List[NotaOut])
def list_notas_aprobatorias(db: Session = Depends(get_db)):
    return _lista(db, calificaciones.notas_aprobatorias(db))

@router.get("/notas/minimo", response_model=List[NotaOut])
def list_notas_con_minimo(valor: float = Query(...), db: Session = Depends(get_db)):
    return _lista(db, calificaciones.notas_con_minimo(db, valor))

@router.get("/notas/estadisticas/tipo", response_model=Dict[str, int])
def estadisticas_por_tipo(db: Session = Depends(get_db)):
    conteo = calificaciones.contar_por_tipo_evaluacion(db)
    return {tipo.value: total for tipo, total in conteo.items()}

@router.get("/notas/estudiante/{id_estudiante}", response_model=List[NotaOut])
def list_notas_por_estudiante(id_estudiante: int, db: Session = Depends(get_db)):
    return _lista(db, crud_nota.get_notas_by_estudiante(db, id_estudiante))

@router.get("/notas/curso/{id_curso}", response_model=List[NotaOut])
def list_notas_por_curso(id_curso: int, db: Session = Depends(get_db)):
    return _lista(db, crud_nota.get_notas_by_curso(db, id_curso))

@router.get("/notas/estudiante/{id_estudiante}/curso/{id_curso}", response_model=List[NotaOut])
def list_notas_por_estudiante_y_curso(id_estudiante: int, id_curso: int, db: Session = Depends(get_db)):
    return _lista(db, crud_nota.get_notas_by_estudiante_y_curso(db, id_estudiante, id_curso))

@router.get("/notas/tipo/{tipo}", response_model=List[NotaOut])
def list_notas_por_tipo(tipo: str, id_estudiante: Optional[int] = None, db: Session = Depends(get_db)):
    return _lista(db, crud_nota.get_notas_by_tipo(db, _tipo(tipo), id_estudiante))

@router.get("/notas/promedio/estudiante/{id_estudiante}", response_model=PromedioOut)
def promedio_estudiante(id_estudiante: int, db: Session = Depends(get_db)):
    return PromedioOut(promedio=calificaciones.promedio_por_estudiante(db, id_estudiante))

@router.get("/notas/promedio/curso/{id_curso}", response_model=PromedioOut)
def promedio_curso(id_curso: int, db: Session = Depends(get_db)):
    return PromedioOut(promedio=calificaciones.promedio_por_curso(db, id_curso))

@router.get("/notas/promedio/estudiante/{id_estudiante}/curso/{id_curso}", response_model=PromedioOut)
def promedio_estudiante_curso(id_estudiante: int, id_curso: int, db: Session = Depends(get_db)):
    return PromedioOut(promedio=calificaciones.promedio_por_estudiante_y_curso(db, id_estudiante, id_curso))

@router.get("/notas/estado/estudiante/{id_estudiante}/curso/{id_curso}", response_model=EstadoAcademicoOut)
def estado_estudiante_curso(id_estudiante: int, id_curso: int, db: Session = Depends(get_db)):
    promedio = calificaciones.promedio_por_estudiante_y_curso(db, id_estudiante, id_curso)
    return EstadoAcademicoOut(
        estudiante_id=id_estudiante,
        curso_id=id_curso,
        promedio=promedio,
        estado=calificaciones.clasificar_promedio(promedio).value,
        aprobado=calificaciones.aprobo_curso(db, id_estudiante, id_curso),
    )

@router.get("/notas/mejores/curso/{id_curso}", response_model=List[NotaOut])
def mejores_notas_curso(id_curso: int, limite: int = Query(default=10, ge=1), db: Session = Depends(get_db)):
    return _lista(db, calificaciones.mejores_notas_por_curso(db, id_curso, limite))

@router.get("/notas/{id}", response_model=NotaOut)
def get_nota(id: int, db: Session = Depends(get_db)):
    nota = crud_nota.get_nota_by_id(db, id)
    if not nota:
        raise HTTPException(status_code=404, detail="Nota no encontrada")
    return _con_estado(db, nota)

@router.put("/notas/{id}", response_model=NotaOut)
def update_nota(id: int, datos: NotaUpdate, db: Session = Depends(get_db)):
    nota = crud_nota.update_nota(db, id, datos.valor, _tipo(datos.tipo_evaluacion), datos.observaciones)
    return _con_estado(db, nota)

@router.delete("/notas/{id}", status_code=204)
def delete_nota(id: int, db: Session = Depends(get_db)):
    crud_nota.delete_nota(db, id)
