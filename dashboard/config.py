# dashboard/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
import os

class Settings(BaseSettings):
    """Dashboard API configuration"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # App settings
    app_name: str = "Resume Ranking Dashboard"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Engine config (YAML, see resumerank.config)
    engine_config_path: str = os.getenv("RESUMERANK_CONFIG", "config/engine.yaml")

    # Ollama settings
    ai_recommendations_enabled: bool = False
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:3b"
    ollama_timeout: int = 60

settings = Settings()
