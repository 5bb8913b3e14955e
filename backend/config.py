from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False
    SERVICE_NAME: str = "feed-analysis-api"

settings = Settings(_env_file=".env", _env_file_encoding="utf-8")
