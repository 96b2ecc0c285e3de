import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Books API Ayarları
    api_base_url: str = os.getenv("BOOKS_API_BASE_URL", "http://127.0.0.1:3000")
    request_encoding: str = os.getenv("BOOKS_REQUEST_ENCODING", "json")

    # HTTP İstemci Ayarları
    http_timeout: float = float(os.getenv("BOOKS_HTTP_TIMEOUT", "10"))
    connect_timeout: float = float(os.getenv("BOOKS_CONNECT_TIMEOUT", "5"))
    max_connections: int = int(os.getenv("BOOKS_MAX_CONNECTIONS", "10"))

    # Yerel Sahte Sunucu Ayarları
    stub_api_host: str = os.getenv("STUB_API_HOST", "127.0.0.1")
    stub_api_port: int = int(os.getenv("STUB_API_PORT", "3000"))

    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "Book List")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
