# crud/payout_crud.py

import logging
from typing import Callable, Optional

from web3 import Web3
from web3.exceptions import Web3Exception

import config
from utils.errors import TransferFailed
from utils.security import decrypt_key

logger = logging.getLogger(__name__)


def book_payout(to_address: str, amount: int) -> Optional[str]:
    """Internal transfer; the WITHDRAWAL row written by the ledger is the record."""
    logger.info("[LEDGER] Book payout of %d to %s", amount, to_address)
    return None


def send_onchain_payout(to_address: str, amount: int, w3: Optional[Web3] = None) -> Optional[str]:
    """
    Send `amount` ledger units from the treasury wallet to `to_address` and
    wait for the receipt. Returns the transaction hash.
    """
    if amount == 0:
        return None
    if not config.TREASURY_ADDRESS or not config.TREASURY_KEY_ENCRYPTED:
        raise TransferFailed("Treasury wallet is not configured (TREASURY_ADDRESS / TREASURY_KEY_ENCRYPTED)")

    if w3 is None:
        if not config.API_URL:
            raise TransferFailed("API_URL is not configured")
        w3 = Web3(Web3.HTTPProvider(config.API_URL))

    # 1️⃣ Decrypt treasury key
    try:
        priv_key = decrypt_key(config.TREASURY_KEY_ENCRYPTED)
    except (ValueError, RuntimeError) as e:
        raise TransferFailed(f"Failed to decrypt treasury key: {e}")

    sender = Web3.to_checksum_address(config.TREASURY_ADDRESS)
    try:
        # 2️⃣ Amount & tx params
        wei_value = w3.to_wei(amount, config.LEDGER_UNIT)
        balance = w3.eth.get_balance(sender)
        logger.info("[CHAIN] Treasury %s holds %s ETH", sender, w3.from_wei(balance, "ether"))
        if balance < wei_value:
            raise TransferFailed("Treasury balance is too low for this withdrawal")

        nonce    = w3.eth.get_transaction_count(sender)
        chain_id = w3.eth.chain_id

        # 3️⃣ Dynamic fees
        block = w3.eth.get_block("pending")
        base_fee     = block.get("baseFeePerGas", w3.to_wei("20", "gwei"))
        priority_fee = w3.to_wei("2", "gwei")
        max_fee      = base_fee + (priority_fee * 2)

        tx = {
            "from":                 sender,
            "to":                   Web3.to_checksum_address(to_address),
            "value":                wei_value,
            "nonce":                nonce,
            "chainId":              chain_id,
            "maxPriorityFeePerGas": priority_fee,
            "maxFeePerGas":         max_fee,
        }
        tx["gas"] = w3.eth.estimate_gas(tx)

        # 4️⃣ Sign, send, wait
        signed  = w3.eth.account.sign_transaction(tx, priv_key)
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
    except (Web3Exception, OSError) as e:
        raise TransferFailed(f"On-chain payout failed: {e}")

    if receipt.status != 1:
        raise TransferFailed(f"Payout transaction reverted: {tx_hash.hex()}")

    logger.info("[CHAIN] Payout of %d %s to %s → %s", amount, config.LEDGER_UNIT, to_address, tx_hash.hex())
    return tx_hash.hex()


def get_payout() -> Callable[[str, int], Optional[str]]:
    if config.PAYOUT_MODE == "onchain":
        return send_onchain_payout
    return book_payout
