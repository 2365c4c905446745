import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def _env_bool(nombre: str, default: str) -> bool:
    return os.getenv(nombre, default).lower() == "true"


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'gestion_notas.db'}")

    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30))

    APP_NAME: str = os.getenv("APP_NAME", "Gestion de Notas")
    DEBUG: bool = _env_bool("DEBUG", "False")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", str(BASE_DIR / "uploads"))

    # Politica de borrado entre Usuario y su perfil (Estudiante/Docente)
    CASCADA_ELIMINAR_USUARIO: bool = _env_bool("CASCADA_ELIMINAR_USUARIO", "False")
    ELIMINAR_USUARIO_CON_PERFIL: bool = _env_bool("ELIMINAR_USUARIO_CON_PERFIL", "False")

    CARGAR_DATOS_PRUEBA: bool = _env_bool("CARGAR_DATOS_PRUEBA", "False")
    ADMIN_EMAIL: str | None = os.getenv("ADMIN_EMAIL")
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")

settings = Settings()
