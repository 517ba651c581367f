import os
from dotenv import load_dotenv

load_dotenv()

GEMINI_API_KEY = (os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()

ANALYSIS_MODEL = os.getenv("ANALYSIS_MODEL", "gemini-2.5-flash")
CHAT_MODEL = os.getenv("CHAT_MODEL", "gemini-3-pro-preview")

CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")
STATE_PATH = os.getenv("STATE_PATH", ".tenant_guardian_state.json")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# canned replies instead of Gemini; forced on when no key is configured
DEMO_MODE = os.getenv("DEMO_MODE", "false").lower() in ("1", "true", "yes") or not GEMINI_API_KEY

DEMO_EMAIL = os.getenv("DEMO_EMAIL", "user@tenantguardian.ai")
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "password")
