import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

env_path = os.path.join(os.getcwd(), ".env")
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    OSU_API_KEY: str = ""
    OSU_API_BASE_URL: str = "https://osu.ppy.sh/api/"
    OSU_API_TIMEOUT: float = 10.0
    OSU_RATE_LIMIT_CALLS: int = 15
    OSU_RATE_LIMIT_PERIOD: float = 1.0
    OSU_CACHE_DURATION: int = 300
    OSU_METRICS_ENABLED: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
