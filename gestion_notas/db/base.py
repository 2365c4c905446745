# Importa todos los modelos para que Base.metadata los conozca
from gestion_notas.db.base_class import Base  # noqa: F401
from gestion_notas.models.usuario import Usuario  # noqa: F401
from gestion_notas.models.estudiante import Estudiante  # noqa: F401
from gestion_notas.models.docente import Docente  # noqa: F401
from gestion_notas.models.curso import Curso  # noqa: F401
from gestion_notas.models.nota import Nota  # noqa: F401
