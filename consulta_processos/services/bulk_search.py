"""
Busca em lote no DataJud.

Os números são processados em lotes de tamanho fixo: todas as consultas de um
lote rodam em paralelo, o lote inteiro termina antes do próximo começar e há
uma pausa entre lotes para não estourar o limite de requisições da API.

Falhas de um item nunca abortam o lote: cada consulta vira exatamente um
BulkOutcome (success, not_found ou error).
"""

import asyncio
import logging
import time
from typing import Callable, List, Optional

from ..config import Config
from ..errors import InvalidRequest
from ..models import BulkOutcome, BulkStatus
from .datajud_client import DataJudClient, LookupFailed, LookupNotFound, LookupOk
from .tribunals import resolve_tribunal

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[BulkOutcome], None]


def classify(process_number: str, result) -> BulkOutcome:
    """Converte o resultado (ou a exceção) de uma consulta em BulkOutcome."""
    if isinstance(result, LookupOk):
        return BulkOutcome(processNumber=process_number, record=result.record, status=BulkStatus.SUCCESS)
    if isinstance(result, LookupNotFound):
        return BulkOutcome(processNumber=process_number, errorMessage=result.message, status=BulkStatus.NOT_FOUND)
    if isinstance(result, LookupFailed):
        return BulkOutcome(processNumber=process_number, errorMessage=result.message, status=BulkStatus.ERROR)
    if isinstance(result, asyncio.CancelledError):
        return BulkOutcome(processNumber=process_number, errorMessage="Consulta cancelada", status=BulkStatus.ERROR)
    if isinstance(result, BaseException):
        return BulkOutcome(
            processNumber=process_number,
            errorMessage=str(result) or "Erro desconhecido",
            status=BulkStatus.ERROR,
        )
    raise TypeError(f"Resultado de consulta inesperado: {result!r}")


def split_batches(items: List[str], batch_size: int) -> List[List[str]]:
    return [items[i:i + batch_size] for i in range(0, len(items), batch_size)]


class BulkSearchService:
    def __init__(
        self,
        client: DataJudClient,
        batch_size: int = 10,
        inter_batch_delay: float = 1.0,
        max_items: int = 1000,
    ):
        if batch_size < 1:
            raise ValueError("batch_size deve ser >= 1")
        self.client = client
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay
        self.max_items = max_items

    @classmethod
    def from_config(cls, client: DataJudClient) -> "BulkSearchService":
        return cls(
            client,
            batch_size=Config.BULK_BATCH_SIZE,
            inter_batch_delay=Config.BULK_INTER_BATCH_DELAY,
            max_items=Config.BULK_MAX_ITEMS,
        )

    def validate(self, process_numbers: List[str]) -> None:
        if not process_numbers:
            raise InvalidRequest("A lista de processos não pode estar vazia")
        if len(process_numbers) > self.max_items:
            raise InvalidRequest(f"Máximo de {self.max_items} processos por busca")
        if any(not (n or "").strip() for n in process_numbers):
            raise InvalidRequest("Número do processo não pode estar vazio")

    async def _run_batch(self, tribunal: str, batch: List[str]) -> List[BulkOutcome]:
        results = await asyncio.gather(
            *[self.client.lookup(tribunal, number) for number in batch],
            return_exceptions=True,
        )
        return [classify(number, result) for number, result in zip(batch, results)]

    async def fetch_bulk(
        self,
        tribunal: str,
        process_numbers: List[str],
        on_success: Optional[SuccessCallback] = None,
    ) -> List[BulkOutcome]:
        """
        Consulta todos os números e devolve um BulkOutcome por número.

        InvalidRequest (lista vazia ou acima do limite) e UnsupportedTribunal
        são levantadas antes de qualquer consulta. Dentro de um lote a ordem dos
        resultados segue a ordem de entrada.
        """
        self.validate(process_numbers)
        resolve_tribunal(tribunal)

        batches = split_batches(process_numbers, self.batch_size)
        outcomes: List[BulkOutcome] = []
        start_time = time.monotonic()

        for index, batch in enumerate(batches):
            logger.info("Lote %d/%d: %d processos (%s)", index + 1, len(batches), len(batch), tribunal)
            batch_outcomes = await self._run_batch(tribunal, batch)
            outcomes.extend(batch_outcomes)

            if on_success is not None:
                for outcome in batch_outcomes:
                    if outcome.status == BulkStatus.SUCCESS:
                        try:
                            on_success(outcome)
                        except Exception:
                            logger.exception("Falha ao registrar resultado de %s", outcome.processNumber)

            if index < len(batches) - 1 and self.inter_batch_delay > 0:
                await asyncio.sleep(self.inter_batch_delay)

        counts = {status: 0 for status in BulkStatus}
        for outcome in outcomes:
            counts[outcome.status] += 1
        logger.info(
            "Busca em lote concluída em %.2fs: %d sucesso, %d não encontrados, %d erros",
            time.monotonic() - start_time,
            counts[BulkStatus.SUCCESS],
            counts[BulkStatus.NOT_FOUND],
            counts[BulkStatus.ERROR],
        )
        return outcomes
