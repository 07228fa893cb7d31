"""Configuration loaded from .env"""

import os

from dotenv import load_dotenv

load_dotenv()

# Calendar days are derived in this timezone
REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "UTC")

# pt-BR day/month/year
REPORT_DATE_FORMAT = os.getenv("REPORT_DATE_FORMAT", "%d/%m/%Y")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

FRONTEND_ORIGINS = [
    o.strip() for o in os.getenv("FRONTEND_ORIGINS", "").split(",") if o.strip()
] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
