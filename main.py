import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from database import SessionLocal, create_tables
from crud.ledger_crud import LedgerNotDeployed, initialize_ledger
from router.deps import ledger_not_deployed_handler
from router.violation_router import router as violation_router
from router.payment_router import router as payment_router
from router.admin_router import router as admin_router
from router.registry_router import router as registry_router

# ─── Logging ────────────────────────────────────────────────────────────────────
logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger("violation-ledger")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables, deploy the ledger on first start
    create_tables()
    if config.ADMIN_ADDRESS:
        with SessionLocal() as db:
            initialize_ledger(
                db,
                config.ADMIN_ADDRESS,
                kind_source=config.KIND_SOURCE,
                registry_owner=config.REGISTRY_OWNER_ADDRESS or None,
            )
    else:
        logger.warning("ADMIN_ADDRESS is not set; run deploy_ledger.py before serving writes")
    yield


app = FastAPI(title="Violation Ledger", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(LedgerNotDeployed, ledger_not_deployed_handler)

app.include_router(violation_router, prefix="/violations", tags=["violations"])
app.include_router(payment_router, prefix="/payments", tags=["payments"])
app.include_router(admin_router, prefix="/admin", tags=["admin"])
app.include_router(registry_router, prefix="/registry", tags=["registry"])


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
