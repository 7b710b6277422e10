from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # sqlite local por padrão; uma URL postgres troca para o banco hospedado
    DATABASE_URL: str = "sqlite:///./flashcards.db"
    SQL_ECHO: bool = False

    # Hospedagem de imagens (API compatível com freeimage.host)
    IMAGE_HOST_UPLOAD_URL: str = "https://freeimage.host/api/1/upload"
    IMAGE_HOST_API_KEY: str = ""
    IMAGE_HOST_TIMEOUT: float = 60.0

    LOG_LEVEL: str = "INFO"


settings = Settings()
