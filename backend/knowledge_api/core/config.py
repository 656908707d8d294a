import os
from dotenv import load_dotenv

# Load .env from the backend directory
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", ".env"))

SECRET_KEY: str = os.getenv("SECRET_KEY", "knowledge-api-dev-secret-change-in-prod")
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "120"))  # 2h

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.abspath(os.path.join(BASE_DIR, "..", ".."))

# JSON collections: stored in backend/data/ unless overridden
DATA_DIR: str = os.getenv("DATA_DIR", os.path.join(BACKEND_DIR, "data"))

# "uuid" | "sequential"
ID_POLICY: str = os.getenv("ID_POLICY", "uuid")

# Deepest topic tree the graph engine will build before reporting bad data
MAX_TREE_DEPTH: int = int(os.getenv("MAX_TREE_DEPTH", "256"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Seeded on startup when the user collection is empty
DEFAULT_ADMIN_NAME: str = os.getenv("DEFAULT_ADMIN_NAME", "Administrator")
DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@example.com")
DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin")
