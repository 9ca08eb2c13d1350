"""
Run script untuk Courier Records
Usage: python run.py

Features:
- Auto-create .env with defaults if missing
- Tables are created on start-up by the application lifespan
"""
import os
from pathlib import Path

import uvicorn

DEFAULT_ENV = """# Database (single SQLite file by default)
DATABASE_URL=sqlite:///./logistics.db

# Auth
JWT_SECRET=change-this-secret
ACCESS_TOKEN_EXPIRE_MINUTES=1440
BCRYPT_ROUNDS=10

# App
APP_ENV=development
LOG_LEVEL=INFO
MAX_UPLOAD_MB=10
CORS_ORIGINS=*
"""


def setup_env_file():
    """Copy .env.example to .env, or write defaults, if .env doesn't exist"""
    env_file = Path(".env")
    env_example = Path(".env.example")

    if env_file.exists():
        return False
    if env_example.exists():
        env_file.write_text(env_example.read_text())
        print("[Setup] Created .env from .env.example")
    else:
        env_file.write_text(DEFAULT_ENV)
        print("[Setup] Created default .env file")
    return True


if __name__ == "__main__":
    print("=" * 50)
    print("  Courier Records - Starting...")
    print("=" * 50)

    setup_env_file()

    uvicorn.run(
        "courier.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        reload=os.getenv("APP_ENV", "development") == "development",
    )
