from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "One Word A Day"
    environment: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./onewordaday.db"

    # LLM provider (Groq exposes an OpenAI-compatible chat completions API)
    groq_api_key: str | None = None
    groq_api_url: str = "https://api.groq.com/openai/v1/chat/completions"
    groq_model: str = "llama-3.1-8b-instant"

    # Image search
    unsplash_access_key: str | None = None
    unsplash_api_url: str = "https://api.unsplash.com/search/photos"

    # Dictionary used to enrich new word bank entries (Merriam-Webster collegiate)
    dictionary_api_key: str | None = None
    dictionary_api_url: str = "https://www.dictionaryapi.com/api/v3/references/collegiate/json"
    dictionary_timeout_sec: float = 10.0

    use_ai_generation: bool = True
    llm_timeout_sec: float = 30.0
    llm_max_tokens: int = 1000
    llm_temperature: float = 0.7
    image_timeout_sec: float = 10.0

    recency_window_days: int = 30
    ai_daily_word_limit: int = 20
    word_bank_scan_limit: int = 100

    # Background job that makes sure every user has a word for today
    daily_job_enabled: bool = False
    daily_job_interval_sec: int = 3600

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
