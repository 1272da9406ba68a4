import os
from typing import List, Optional


def _lista_desde_env(nombre: str, por_defecto: str) -> List[str]:
    valor = os.getenv(nombre, por_defecto)
    return [item.strip() for item in valor.split(",") if item.strip()]


class Settings:
    """Configuración leída de variables de entorno al arrancar."""

    def __init__(self):
        # Sin DATABASE_URL la API arranca igual: lecturas vacías, escrituras fallan
        self.database_url: Optional[str] = os.getenv("DATABASE_URL") or None
        self.owner_open_id: Optional[str] = os.getenv("OWNER_OPEN_ID") or None

        # Azure OpenAI
        self.azure_openai_endpoint: Optional[str] = os.getenv("AZURE_OPENAI_ENDPOINT")
        self.azure_openai_key: Optional[str] = os.getenv("AZURE_OPENAI_KEY")
        self.openai_api_version: str = os.getenv("OPENAI_API_VERSION", "2024-08-01-preview")
        self.azure_openai_deployment: str = os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4o")
        self.llm_timeout_seconds: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

        self.cors_origins: List[str] = _lista_desde_env(
            "CORS_ORIGINS", "http://localhost:8081,http://localhost:19006"
        )
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
