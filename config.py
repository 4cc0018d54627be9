# config.py
"""
Environment configuration for the Handover backend.

All settings are read once from the process environment (a local .env file
is loaded first). Modules import the constants they need from here.
"""
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
     return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Database: DATABASE_URL wins, otherwise build the Azure SQL URL from parts
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")

DATABASE_URL = os.getenv("DATABASE_URL") or (
     f"mssql+pymssql://{quote_plus(DB_USER or '')}:{quote_plus(DB_PASS or '')}"
     f"@{DB_SERVER}:{DB_PORT}/{DB_NAME}"
)
SQL_ECHO = _flag("SQL_ECHO")

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "720"))

# HTTP
CORS_ORIGINS = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
PORT = int(os.getenv("PORT", "10000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Azure Blob Storage
AZURE_STORAGE_ACCOUNT = os.getenv("AZURE_STORAGE_ACCOUNT")
AZURE_STORAGE_KEY = os.getenv("AZURE_STORAGE_KEY")
AZURE_STORAGE_CONTAINER = os.getenv("AZURE_STORAGE_CONTAINER", "handover-images")
UPLOAD_URL_TTL_MINUTES = int(os.getenv("UPLOAD_URL_TTL_MINUTES", "15"))

# Whether admins may keep editing an object after it has been released
ADMIN_CAN_EDIT_RELEASED = _flag("ADMIN_CAN_EDIT_RELEASED")
