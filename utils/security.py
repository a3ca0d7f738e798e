# utils/security.py
"""
Treasury key handling.

The treasury's private key never sits in the environment in the clear: the
operator stores a Fernet token in TREASURY_KEY_ENCRYPTED and the FERNET_KEY
that opens it. `deploy_ledger.py --new-fernet-key` and `--encrypt-key`
produce both values.
"""
import os
from dotenv import load_dotenv
load_dotenv()
from cryptography.fernet import Fernet, InvalidToken


def _fernet() -> Fernet:
    # read per call so a rotated FERNET_KEY takes effect without a restart
    key = os.getenv("FERNET_KEY")
    if not key:
        raise RuntimeError("Set FERNET_KEY in your environment")
    return Fernet(key.encode())


def new_fernet_key() -> str:
    return Fernet.generate_key().decode()


def encrypt_key(raw_private_key: str) -> str:
    """Fernet token for a hex private key, suitable for TREASURY_KEY_ENCRYPTED."""
    raw_private_key = raw_private_key.strip()
    if not raw_private_key:
        raise ValueError("Private key is empty")
    return _fernet().encrypt(raw_private_key.encode()).decode()


def decrypt_key(token: str) -> str:
    """
    Opens a TREASURY_KEY_ENCRYPTED token.
    Raises ValueError if the token was tampered with or FERNET_KEY is wrong.
    """
    try:
        return _fernet().decrypt(token.encode()).decode()
    except InvalidToken:
        raise ValueError("Invalid encryption token for private key")
