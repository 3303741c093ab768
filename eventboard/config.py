"""
Process-wide configuration.

Values are read from the environment (and a local .env file) once, when this
module is first imported, and stay fixed for the life of the process.
"""

import os
from dotenv import load_dotenv

# Load .env only once here
load_dotenv()

# --- TOKENS ---
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise RuntimeError("JWT_SECRET is missing. Set it in .env")

JWT_ALGORITHM = "HS256"
TOKEN_EXPIRATION_MINUTES = int(os.getenv("TOKEN_EXPIRATION_MINUTES", 60 * 24 * 7))  # Default 7 days

# --- STORAGE ---
DATABASE_PATH = os.getenv("DATABASE_PATH", "eventboard.db")

# --- SERVER ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
GATEWAY_PORT = int(os.getenv("GATEWAY_PORT", 5050))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
