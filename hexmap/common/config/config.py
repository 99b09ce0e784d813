import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger


class ApplicationConfig:
    """Settings read from the process environment, topped up from .env.{APP_ENV}"""

    def __init__(self):
        env_file = Path().absolute() / f".env.{os.getenv('APP_ENV')}"
        if load_dotenv(env_file):
            logger.info(f"Env variables loaded from {env_file.name}")
        else:
            logger.info("No env file found, using process environment")

    @staticmethod
    def get(key: str, default: str | None = None) -> str | None:
        return os.getenv(key, default)

    def get_int(self, key: str, default: int) -> int:
        return int(self.get(key, str(default)))

    def get_float(self, key: str, default: float) -> float:
        return float(self.get(key, str(default)))


config = ApplicationConfig()
