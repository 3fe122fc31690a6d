import os
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Optional .env next to the project root; real environment wins
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
PROJECT_NAME = os.getenv("PROJECT_NAME", "Broker Directory API")
API_VERSION = os.getenv("API_VERSION", "1.0.0")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # text | json

# DB (hosted Postgres). Service-role credential beats the anonymous one.
DB_USER = os.getenv("DB_USER", "brokers")
DB_PASS = os.getenv("DB_SERVICE_ROLE_KEY") or os.getenv("DB_ANON_KEY") or os.getenv("DB_PASS", "brokers")
DB_NAME = os.getenv("DB_NAME", "brokers")
DB_HOST = os.getenv("DB_HOST", "postgres")
DB_PORT = int(os.getenv("DB_PORT", "5432"))

DATABASE_URL = os.getenv("DATABASE_URL") or URL.create(
    "postgresql+psycopg2",
    username=DB_USER,
    password=DB_PASS,
    host=DB_HOST,
    port=DB_PORT,
    database=DB_NAME,
)

DB_CONNECT_TIMEOUT_SECONDS = int(os.getenv("DB_CONNECT_TIMEOUT_SECONDS", "5"))
DB_STATEMENT_TIMEOUT_MS = int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))
DB_POOL_TIMEOUT_SECONDS = int(os.getenv("DB_POOL_TIMEOUT_SECONDS", "5"))

# Redis is optional; empty URL disables the filter cache
REDIS_URL = os.getenv("REDIS_URL", "")
FILTERS_CACHE_TTL_SECONDS = int(os.getenv("FILTERS_CACHE_TTL_SECONDS", "300"))

RATE_LIMIT = os.getenv("RATE_LIMIT", "30/minute")
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in {"1", "true", "yes"}

DEV_ORIGINS = ["http://localhost:8000", "http://127.0.0.1:8000"]
ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("ALLOWED_ORIGINS", "https://corretores.example.com").split(",")
    if o.strip()
]


def cors_origins() -> list[str]:
    if ENVIRONMENT == "production":
        return ALLOWED_ORIGINS
    return DEV_ORIGINS
