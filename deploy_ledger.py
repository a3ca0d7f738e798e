"""
One-shot deployment of the violation ledger.

Creates the tables, the ledger state (owner, first pauser, default fines)
and the type registry, then records the deployment in
deployments/<name>-latest.json.

Usage:
    ADMIN_ADDRESS=0x... python3 deploy_ledger.py [--kind-source registry] [--name local]
    python3 deploy_ledger.py --new-fernet-key
    FERNET_KEY=... python3 deploy_ledger.py --encrypt-key
"""
import argparse
import getpass
import json
import logging
import sys
from pathlib import Path

import config
from database import SessionLocal, create_tables, engine
from crud.ledger_crud import initialize_ledger, pauser_count
from crud.registry_crud import get_registry_owner, get_active_types
from utils.security import encrypt_key, new_fernet_key

logger = logging.getLogger("deploy")


def deploy(admin: str, kind_source: str, registry_owner: str = None, name: str = "local") -> dict:
    create_tables()
    with SessionLocal() as db:
        state = initialize_ledger(db, admin, kind_source=kind_source, registry_owner=registry_owner)
        info = {
            "name": name,
            "database": engine.url.render_as_string(hide_password=True),
            "owner": state.owner_address,
            "kind_source": state.kind_source,
            "deployed_at": state.created_at.isoformat() if state.created_at else None,
            "pauser_count": pauser_count(db),
            "registry": {
                "owner": get_registry_owner(db),
                "active_types": get_active_types(db),
            },
        }

    out_dir = Path(config.DEPLOYMENTS_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{name}-latest.json"
    out_file.write_text(json.dumps(info, indent=2))
    logger.info("Deployment recorded in %s", out_file)
    return info


def main() -> None:
    parser = argparse.ArgumentParser(description="Deploy the violation ledger")
    parser.add_argument("--admin", default=config.ADMIN_ADDRESS, help="administrator account address")
    parser.add_argument("--registry-owner", default=config.REGISTRY_OWNER_ADDRESS or None)
    parser.add_argument("--kind-source", choices=["static", "registry"], default=config.KIND_SOURCE)
    parser.add_argument("--name", default="local", help="deployment name")
    parser.add_argument("--new-fernet-key", action="store_true", help="print a fresh FERNET_KEY and exit")
    parser.add_argument(
        "--encrypt-key", action="store_true",
        help="prompt for the treasury private key, print TREASURY_KEY_ENCRYPTED and exit",
    )
    args = parser.parse_args()

    if args.new_fernet_key:
        print(f"FERNET_KEY={new_fernet_key()}")
        return
    if args.encrypt_key:
        raw = getpass.getpass("Treasury private key: ")
        try:
            print(f"TREASURY_KEY_ENCRYPTED={encrypt_key(raw)}")
        except (ValueError, RuntimeError) as e:
            print(f"ERROR: {e}")
            sys.exit(1)
        return

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    if not args.admin:
        print("ERROR: Set ADMIN_ADDRESS or pass --admin.")
        sys.exit(1)

    info = deploy(args.admin, args.kind_source, args.registry_owner, args.name)

    print()
    print("=" * 55)
    print("  ✅  Violation ledger deployed")
    print(f"      Owner      : {info['owner']}")
    print(f"      Kinds      : {info['kind_source']}")
    print(f"      Database   : {info['database']}")
    print("=" * 55)


if __name__ == "__main__":
    main()
