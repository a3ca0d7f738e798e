# config.py

import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

# ─── Load env vars ───────────────────────────────────────────────────────────────
load_dotenv()

# MySQL is used when DB_HOST is set, otherwise DATABASE_URL (sqlite by default)
DB_USER     = os.getenv("DB_USER", "ledger")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_HOST     = os.getenv("DB_HOST")
DB_PORT     = os.getenv("DB_PORT", "3306")
DB_NAME     = os.getenv("DB_NAME", "violationledger")

if DB_HOST:
    DATABASE_URL = (
        f"mysql+mysqlconnector://{DB_USER}:{quote_plus(DB_PASSWORD)}"
        f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )
else:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./violation_ledger.db")

SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

# ─── Ledger deployment ───────────────────────────────────────────────────────────
ADMIN_ADDRESS          = os.getenv("ADMIN_ADDRESS", "")
REGISTRY_OWNER_ADDRESS = os.getenv("REGISTRY_OWNER_ADDRESS", ADMIN_ADDRESS)
KIND_SOURCE            = os.getenv("KIND_SOURCE", "static")   # static | registry
DEPLOYMENTS_DIR        = os.getenv("DEPLOYMENTS_DIR", "deployments")

# ─── Payouts ─────────────────────────────────────────────────────────────────────
PAYOUT_MODE            = os.getenv("PAYOUT_MODE", "ledger")   # ledger | onchain
API_URL                = os.getenv("API_URL")
TREASURY_ADDRESS       = os.getenv("TREASURY_ADDRESS")
TREASURY_KEY_ENCRYPTED = os.getenv("TREASURY_KEY_ENCRYPTED")
LEDGER_UNIT            = os.getenv("LEDGER_UNIT", "gwei")     # one ledger unit, in web3 units

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
