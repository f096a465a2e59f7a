from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PRODUCTS_DATABASE_URL: str = "sqlite:///./productos.db"
    TRANSACTIONS_DATABASE_URL: str = "sqlite:///./transacciones.db"
    PRODUCTS_API_BASE_URL: str = "http://127.0.0.1:5054"
    PRODUCTS_API_TIMEOUT_SECONDS: float = 5.0
    FRONTEND_ORIGINS: List[str] = ["http://localhost:5173"]
    LOW_STOCK_THRESHOLD: int = 10
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 200
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
