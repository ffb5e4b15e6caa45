from fastapi import APIRouter, Depends
from typing import List
from ..models import (
    AdvancedSearchRequest,
    BulkOutcome,
    BulkSearchRequest,
    ProcessRecord,
    ProcessSearchRequest,
)
from ..services.datajud_client import DataJudClient
from ..services.bulk_search import BulkSearchService
from ..database import add_search_history, add_search_history_many
import asyncio
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/processes", tags=["processes"])

_client = None

def get_client() -> DataJudClient:
    global _client
    if _client is None:
        _client = DataJudClient.from_config()
        logger.info("Cliente DataJud iniciado em modo %s", _client.mode.value)
    return _client

def get_bulk_service(client: DataJudClient = Depends(get_client)) -> BulkSearchService:
    return BulkSearchService.from_config(client)

@router.post("/search", response_model=ProcessRecord)
async def search_process(request: ProcessSearchRequest, client: DataJudClient = Depends(get_client)):
    record = await client.fetch_one(request.tribunal, request.processNumber)
    await asyncio.to_thread(add_search_history, request.processNumber, request.tribunal, record)
    return record

@router.post("/advanced-search", response_model=List[ProcessRecord])
async def advanced_search(request: AdvancedSearchRequest, client: DataJudClient = Depends(get_client)):
    records = await client.advanced_search(request)
    await asyncio.to_thread(add_search_history_many, request.tribunal, [(r.numeroProcesso, r) for r in records])
    return records

@router.post("/bulk-search")
async def bulk_search(request: BulkSearchRequest, service: BulkSearchService = Depends(get_bulk_service)):
    found: List[BulkOutcome] = []
    outcomes = await service.fetch_bulk(request.tribunal, request.processNumbers, on_success=found.append)
    # History file is written once per request, off the event loop
    await asyncio.to_thread(add_search_history_many, request.tribunal, [(o.processNumber, o.record) for o in found])
    return {
        "total": len(outcomes),
        "sucesso": sum(1 for o in outcomes if o.status == "success"),
        "nao_encontrados": sum(1 for o in outcomes if o.status == "not_found"),
        "erros": sum(1 for o in outcomes if o.status == "error"),
        "resultados": [o.model_dump(mode='json') for o in outcomes],
    }
