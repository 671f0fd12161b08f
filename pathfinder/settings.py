## Application settings configuration
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PATHWAYS_FILE = Path(__file__).parent / "data" / "manoa_degree_pathways.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "dev"
    database_url: str = "postgresql+psycopg://localhost:5432/pathfinder"
    redis_url: str = "redis://localhost:6379/0"

    # Roadmap pipeline
    pathways_file: Path = DEFAULT_PATHWAYS_FILE
    supported_campus_id: str = "uh_manoa"
    synthesis_temperature: float = 0.2

    # Ollama settings
    ollama_base_url: str = "http://localhost:11434/v1"
    ollama_model: str = "llama3.1"

    # Hosted providers
    LLM_PROVIDER: str = "openai"
    llm_json_mode: bool = True
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    GROQ_API_KEY: str | None = None
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama-3.1-8b-instant"


settings = Settings()
