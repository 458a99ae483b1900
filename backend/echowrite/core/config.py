from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="ignore")

    database_url: str
    database_url_sync: str = ""
    cors_origins: str = "http://localhost:5173,http://localhost:8080"
    log_level: str = "INFO"

    # Supabase Auth is the identity provider
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_jwt_secret: str = ""
    jwt_algorithm: str = "HS256"

    # OpenAI-compatible chat completion gateway
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_gateway_api_key: str = ""
    ai_model: str = "google/gemini-3-flash-preview"
    ai_temperature: float = 0.7
    ai_timeout_seconds: float = 60.0

    max_text_length: int = 10_000
    default_max_usage: int = 10

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
