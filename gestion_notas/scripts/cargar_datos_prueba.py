import logging
import random
from datetime import date

from sqlalchemy.orm import Session

from gestion_notas.crud import crud_curso, crud_docente, crud_estudiante, crud_nota
from gestion_notas.db.session import SessionLocal
from gestion_notas.models.docente import Docente
from gestion_notas.models.nota import TipoEvaluacionEnum
from gestion_notas.schemas.curso import CursoCreate
from gestion_notas.schemas.docente import DocenteCompletoCreate
from gestion_notas.schemas.estudiante import EstudianteCompletoCreate

logger = logging.getLogger(__name__)

CONTRASENA_PRUEBA = "123456"

DOCENTES = [
    ("DOC001", "Carlos", "Rodríguez Pérez", "carlos.rodriguez@colegio.edu.pe", "999888777", "Matemáticas"),
    ("DOC002", "María", "González Silva", "maria.gonzalez@colegio.edu.pe", "999888666", "Ciencias"),
    ("DOC003", "José", "Martínez López", "jose.martinez@colegio.edu.pe", "999888555", "Historia"),
]

ESTUDIANTES = [
    ("EST001", "Ana", "García Torres", "ana.garcia@estudiante.edu.pe", "987654321", "Av. Principal 123"),
    ("EST002", "Luis", "Fernández Ruiz", "luis.fernandez@estudiante.edu.pe", "987654322", "Jr. Secundaria 456"),
    ("EST003", "Carmen", "López Mendoza", "carmen.lopez@estudiante.edu.pe", "987654323", "Calle Tercera 789"),
    ("EST004", "Pedro", "Sánchez Vega", "pedro.sanchez@estudiante.edu.pe", "987654324", "Av. Los Olivos 321"),
]

# (codigo, nombre, descripcion, creditos, indice del docente)
CURSOS = [
    ("CUR001", "Matemática I", "Álgebra y Geometría", 4, 0),
    ("CUR002", "Física I", "Mecánica Clásica", 4, 1),
    ("CUR003", "Historia del Perú", "Historia y Civilización", 3, 2),
    ("CUR004", "Química General", "Fundamentos de Química", 4, 1),
]

# Cursos (por indice) en los que se califica a cada estudiante
MATRICULAS = [(0, 1, 2), (0, 1, 3), (1, 2, 3), (0, 2, 3)]

TIPOS_POR_CURSO = (
    TipoEvaluacionEnum.PARCIAL,
    TipoEvaluacionEnum.TAREA,
    TipoEvaluacionEnum.PRACTICA,
    TipoEvaluacionEnum.FINAL,
)

def cargar_datos_prueba(db: Session) -> bool:
    """
    Crea docentes, estudiantes, cursos y notas de ejemplo.
    No hace nada si ya existen docentes; devuelve True si cargo datos.
    """
    if db.query(Docente).count() > 0:
        logger.info("Ya existen datos de prueba, omitiendo creación")
        return False

    logger.info("Creando datos de prueba...")
    docentes = [
        crud_docente.create_docente_completo(db, DocenteCompletoCreate(
            codigo=codigo, nombres=nombres, apellidos=apellidos, email=email,
            contrasena=CONTRASENA_PRUEBA, telefono=telefono, especialidad=especialidad,
            fecha_contratacion=date(date.today().year - 2, 3, 1),
        ))
        for codigo, nombres, apellidos, email, telefono, especialidad in DOCENTES
    ]
    estudiantes = [
        crud_estudiante.create_estudiante_completo(db, EstudianteCompletoCreate(
            codigo=codigo, nombres=nombres, apellidos=apellidos, email=email,
            contrasena=CONTRASENA_PRUEBA, telefono=telefono, direccion=direccion,
            fecha_nacimiento=date(2005, 3, 15),
        ))
        for codigo, nombres, apellidos, email, telefono, direccion in ESTUDIANTES
    ]
    cursos = [
        crud_curso.create_curso(db, CursoCreate(
            codigo=codigo, nombre=nombre, descripcion=descripcion, creditos=creditos,
            id_docente=docentes[indice].id,
        ))
        for codigo, nombre, descripcion, creditos, indice in CURSOS
    ]
    logger.info("%s docentes, %s estudiantes y %s cursos creados", len(docentes), len(estudiantes), len(cursos))

    for estudiante, indices in zip(estudiantes, MATRICULAS):
        for indice in indices:
            for tipo in TIPOS_POR_CURSO:
                crud_nota.create_nota(
                    db, estudiante, cursos[indice], random.randint(10, 20), tipo, "Nota de prueba"
                )
    logger.info("Notas creadas para todos los estudiantes")
    return True

if __name__ == '__main__':
    sesion = SessionLocal()
    try:
        cargar_datos_prueba(sesion)
    finally:
        sesion.close()
