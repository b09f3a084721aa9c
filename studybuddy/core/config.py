from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="study-buddy", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=5001, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        alias="CORS_ORIGINS",
    )

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class LLMSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # Default provider for one-shot chat and generation: "openai", "llama" or "google"
    model_provider: str = Field(default="openai", alias="MODEL_PROVIDER")

    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-3.5-turbo", alias="OPENAI_MODEL")

    sambanova_api_key: Optional[str] = Field(default=None, alias="SAMBANOVA_API_KEY")
    sambanova_base_url: str = Field(
        default="https://api.sambanova.ai/v1", alias="SAMBANOVA_BASE_URL"
    )
    llama_model: str = Field(
        default="Meta-Llama-3.3-70B-Instruct", alias="LLAMA_MODEL"
    )

    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.0-flash", alias="GEMINI_MODEL")

    timeout_seconds: float = Field(default=45.0, alias="LLM_TIMEOUT_SECONDS")

    # Chat window: 1 system + 19 prior turns + 1 current user turn
    max_turns: int = Field(default=21, alias="CHAT_MAX_TURNS")
    chat_max_tokens: int = Field(default=1000, alias="CHAT_MAX_TOKENS")
    chat_temperature: float = Field(default=0.7, alias="CHAT_TEMPERATURE")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    llm: LLMSettings = Field(default_factory=lambda: LLMSettings())


settings = Settings()
