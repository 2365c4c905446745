from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from gestion_notas.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db():
    """
    Generador de sesiones de base de datos para FastAPI.
    Cada peticion trabaja en su propia transaccion: cualquier error
    deshace lo pendiente antes de cerrar la sesion.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
