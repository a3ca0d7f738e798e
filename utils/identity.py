# utils/identity.py

from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(address: str) -> str:
    """Checksum an account address; raises ValueError for anything else."""
    if not address or not Web3.is_address(address):
        raise ValueError(f"Not a valid account address: {address!r}")
    return Web3.to_checksum_address(address)


def same_address(a: str, b: str) -> bool:
    return bool(a) and bool(b) and a.lower() == b.lower()
