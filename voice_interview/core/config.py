from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_EVALUATE: str = "gpt-3.5-turbo"
    OPENAI_TEMPERATURE_EVALUATE: float = 0.7
    OPENAI_MAX_TOKENS_EVALUATE: int = 500
    OPENAI_TIMEOUT_SECONDS: float = 60.0

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    ANSWER_STORE_PATH: str = "./data/ideal_answers.json"

    SESSION_LISTEN_DELAY_SECONDS: float = 3.0
    SESSION_ADVANCE_DELAY_SECONDS: float = 1.0

    SPEECH_LANGUAGE: str = "en-US"
    CAPTURE_TIMEOUT_SECONDS: float = 8.0
    CAPTURE_PHRASE_TIME_LIMIT_SECONDS: float = 30.0
    TTS_RATE_WPM: int = 180


settings = Settings()
