# app/settings.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


# Google Apps Script web app acting as the sheet backend.
# Left empty (or with the placeholder) the app runs but every read comes back empty.
SHEET_API_URL = os.getenv("SHEET_API_URL", "").strip()
SHEET_API_PLACEHOLDER = "HAY_DAN_URL"
SHEET_TIMEOUT = float(os.getenv("SHEET_TIMEOUT", "30"))

# Public IP lookup sent along with login requests
CLIENT_IP_URL = os.getenv("CLIENT_IP_URL", "https://api.ipify.org?format=json")

# Store rows: repair rows read with the pre-"region" column order
SHIFT_CORRECTION = _env_bool("SHIFT_CORRECTION", "true")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Dashboard figures
INVENTORY_VALUE = float(os.getenv("INVENTORY_VALUE", "55000000"))
EXPENSE_RATIO = float(os.getenv("EXPENSE_RATIO", "0.7"))
DAILY_REVENUE_DAYS = int(os.getenv("DAILY_REVENUE_DAYS", "15"))
AUTO_REFRESH_SEC = int(os.getenv("AUTO_REFRESH_SEC", "120"))

# Small instruction-tuned model for the business summary
SUMMARY_ENABLED = _env_bool("SUMMARY_ENABLED", "true")
SUMMARY_MODEL_ID = os.getenv("SUMMARY_MODEL_ID", "Qwen/Qwen2.5-0.5B-Instruct")
SUMMARY_MAX_NEW_TOKENS = int(os.getenv("SUMMARY_MAX_NEW_TOKENS", "200"))
SUMMARY_LANGUAGE = os.getenv("SUMMARY_LANGUAGE", "Vietnamese")
PRELOAD_SUMMARY_MODEL = _env_bool("PRELOAD_SUMMARY_MODEL", "false")

PROJECT_ROOT = Path(__file__).resolve().parents[1]

HF_HOME = PROJECT_ROOT / "hf-cache"
TRANSFORMERS_CACHE = HF_HOME / "transformers"
