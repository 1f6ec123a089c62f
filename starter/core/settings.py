"""
Application Settings

Values come from the environment (optionally a .env file).
"""
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./starter.db")

# Used to build links in outgoing mail. Must end with '/'.
BASE_URL = os.getenv("BASE_URL", "http://localhost:8000/")

# Structured aspect logs
LOG_FOLDER_PATH = os.getenv("LOG_FOLDER_PATH", "logs")
LOG_FILE_SIZE_LIMIT_BYTES = int(os.getenv("LOG_FILE_SIZE_LIMIT_BYTES", "5000000"))
LOG_RETAINED_FILE_COUNT = int(os.getenv("LOG_RETAINED_FILE_COUNT", "1"))

# Calls slower than this are reported by PerformanceInterceptor
PERFORMANCE_THRESHOLD_SECONDS = float(os.getenv("PERFORMANCE_THRESHOLD_SECONDS", "5"))

# Mail
SYSTEM_EMAIL = os.getenv("SYSTEM_EMAIL", "no-reply@localhost")
SMTP_SERVER = os.getenv("SMTP_SERVER", "localhost")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
EMAIL_PASSWORD = os.getenv("EMAIL_PASSWORD") or os.getenv("EMAIL_APP_PASSWORD")

# Signs email confirmation tokens
EMAIL_TOKEN_SECRET = os.getenv("EMAIL_TOKEN_SECRET", "dev-only-secret")
