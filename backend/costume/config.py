from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "extra": "ignore",
        "env_prefix": "",
        "case_sensitive": False,
        "protected_namespaces": (),
    }

    # Model API (credential name differs per deployment target)
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("openai_api_key", "llm_api_key"),
    )
    model_name: str = "gpt-4o-mini"
    chat_completions_url: str = "https://api.openai.com/v1/chat/completions"
    model_temperature: float | None = 0.7
    model_timeout_seconds: float = 60.0

    # Costume pipeline
    default_budget: float = 30.0
    placeholder_image_url: str = "https://placehold.co/400x400?text={name}"

    # App
    environment: str = "development"
    log_level: str = "INFO"
    log_file: str = ""


settings = Settings()
