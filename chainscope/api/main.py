import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

# --- Imports ---
from chainscope.config import get_settings
from chainscope.core.entities.balance import BalanceResponse
from chainscope.core.entities.scan import BALANCE_UNAVAILABLE_MESSAGE, ScanRequest, ScanResult
from chainscope.core.entities.transaction import TransactionFilters, TransactionRecord
from chainscope.core.interfaces.indexer import IIndexerSource
from chainscope.core.services import QueryOrchestrator
from chainscope.core.use_cases.balance_aggregator import derive_chart_segments, derive_totals
from chainscope.core.use_cases.category_classifier import Category, classify
from chainscope.infrastructure.gateways.uniquescan_api import UniquescanGateway

# Setup Logging
logging.basicConfig(level=get_settings().log_level.upper())
logger = logging.getLogger("Chainscope")

app = FastAPI(title="Chainscope API", version="1.0.0", description="Account history and balance breakdown from the Unique Network indexer")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Dependency Injection ---

async def get_indexer():
    gateway = UniquescanGateway(get_settings())
    try:
        yield gateway
    finally:
        await gateway.aclose()


def get_orchestrator(indexer: IIndexerSource = Depends(get_indexer)) -> QueryOrchestrator:
    return QueryOrchestrator(indexer, get_settings())


def get_filters(
    methodIn: Optional[List[str]] = Query(None, description="Extrinsic methods to include"),
    sectionIn: Optional[List[str]] = Query(None, description="Extrinsic sections to include"),
    includeTransfers: bool = Query(False, description="Also fetch outgoing balance transfers"),
) -> TransactionFilters:
    return TransactionFilters(methodIn=methodIn, sectionIn=sectionIn, includeTransfers=includeTransfers)

# --- Endpoints ---

@app.get("/health")
async def health():
    return {"status": "healthy", "indexer": get_settings().indexer_base_url}


@app.get("/v1/scan", response_model=ScanResult)
async def scan_default(
    category: Category = Query(Category.ALL),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    """
    Scan the configured default account with the configured default filters.
    """
    return await orchestrator.scan(orchestrator.default_request(), category)


@app.get("/v1/scan/{address}", response_model=ScanResult)
async def scan_address(
    address: str,
    category: Category = Query(Category.ALL),
    filters: TransactionFilters = Depends(get_filters),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    """
    Transaction history, category counters and balance chart for one account.
    Indexer failures come back as `failed` channel states, never as 5xx.
    """
    return await orchestrator.scan(ScanRequest(address=address, filters=filters), category)


@app.get("/v1/transactions", response_model=List[TransactionRecord])
async def get_transactions(
    address: str = Query(..., min_length=1, description="Account address"),
    category: Category = Query(Category.ALL),
    filters: TransactionFilters = Depends(get_filters),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    records = await orchestrator.fetch_transactions(address, filters)
    return classify(records, category)


@app.get("/v1/balance", response_model=BalanceResponse)
async def get_balance(
    address: str = Query(..., min_length=1, description="Account address"),
    orchestrator: QueryOrchestrator = Depends(get_orchestrator),
):
    snapshot = await orchestrator.fetch_balance(address)
    if snapshot is None:
        raise HTTPException(status_code=404, detail=BALANCE_UNAVAILABLE_MESSAGE)

    return BalanceResponse(
        address=address,
        balance=snapshot,
        segments=derive_chart_segments(snapshot, orchestrator.settings.chart_policy),
        totals=derive_totals(snapshot),
    )


def start() -> None:
    """Entry point for chainscope-api."""
    settings = get_settings()
    logger.info(f"Starting Chainscope API on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "chainscope.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    start()
