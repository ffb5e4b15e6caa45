# services/datajud_client.py
"""
Cliente da API pública do DataJud (CNJ).

Uma consulta = um POST em <base>/api_publica_<alias>/_search com o corpo
Elasticsearch correspondente. Este módulo não faz retentativas: falhas de uma
consulta individual sobem para quem chamou (ou, em lote, viram dado no
BulkOutcome).

O modo de operação (LIVE/DEMO) é injetado no construtor. Sem chave de API o
cliente responde apenas aos números de demonstração e falha rápido com
DemoModeUnconfigured para todo o resto, sem tocar a rede.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import requests
from requests.adapters import HTTPAdapter

from ..config import Config
from ..errors import ConsultaError, DemoModeUnconfigured, InvalidRequest, NotFound, UpstreamError
from ..models import NOT_INFORMED, AdvancedSearchRequest, ProcessRecord
from .demo import demo_source, is_demo_number, is_demo_term
from .normalizer import extract_hits, normalize_hit
from .tribunals import resolve_tribunal

logger = logging.getLogger(__name__)

ADVANCED_SEARCH_SIZE = 20
ADVANCED_NOT_FOUND = "Nenhum processo encontrado com os filtros especificados"


class LookupMode(str, Enum):
    LIVE = "live"
    DEMO = "demo"


# ==========================
# RESULTADO DE UMA CONSULTA
# ==========================

@dataclass(frozen=True)
class LookupOk:
    record: ProcessRecord


@dataclass(frozen=True)
class LookupNotFound:
    message: str


@dataclass(frozen=True)
class LookupFailed:
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error) or "Erro desconhecido"


LookupResult = Union[LookupOk, LookupNotFound, LookupFailed]


def criar_sessao(pool_size: int = 10) -> requests.Session:
    """Sessão HTTP com pool dimensionado para um lote e sem retry automático."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
    session.mount('http://', adapter)
    session.mount('https://', adapter)
    return session


def only_digits(process_number: str) -> str:
    return re.sub(r"\D", "", process_number or "")


def build_match_query(digits: str) -> Dict[str, Any]:
    return {"query": {"match": {"numeroProcesso": digits}}, "size": 1}


def build_advanced_query(request: AdvancedSearchRequest) -> Dict[str, Any]:
    """Monta a query bool/range/multi_match; levanta InvalidRequest sem filtros."""
    must: List[Dict[str, Any]] = []

    if request.processClass:
        must.append({"match": {"classe.nome": request.processClass}})

    if request.judgingBody:
        must.append({"match": {"orgaoJulgador.nome": request.judgingBody}})

    if request.filingDateFrom or request.filingDateTo:
        date_range = {}
        if request.filingDateFrom:
            date_range["gte"] = request.filingDateFrom
        if request.filingDateTo:
            date_range["lte"] = request.filingDateTo
        must.append({"range": {"dataAjuizamento": date_range}})

    if request.searchTerm:
        must.append({
            "multi_match": {
                "query": request.searchTerm,
                "fields": ["classe.nome", "orgaoJulgador.nome", "assuntos.nome"],
            }
        })

    if not must:
        raise InvalidRequest("É necessário especificar pelo menos um filtro de busca")

    return {
        "query": {"bool": {"must": must}},
        "size": ADVANCED_SEARCH_SIZE,
        "sort": [{"dataAjuizamento": {"order": "desc"}}],
    }


class DataJudClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api-publica.datajud.cnj.jus.br/",
        timeout: float = 30.0,
        mode: Optional[LookupMode] = None,
        session: Optional[requests.Session] = None,
        pool_size: int = 10,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.mode = mode or (LookupMode.LIVE if api_key else LookupMode.DEMO)
        self.session = session or criar_sessao(pool_size)

    @classmethod
    def from_config(cls, session: Optional[requests.Session] = None) -> "DataJudClient":
        return cls(
            api_key=Config.DATAJUD_API_KEY,
            base_url=Config.DATAJUD_BASE_URL,
            timeout=Config.DATAJUD_TIMEOUT,
            session=session,
            pool_size=Config.BULK_BATCH_SIZE,
        )

    def endpoint(self, alias: str) -> str:
        return f"{self.base_url}api_publica_{alias}/_search"

    def _post(self, alias: str, body: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "Authorization": f"APIKey {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = self.session.post(self.endpoint(alias), json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(None, str(e)) from e

        if not response.ok:
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(response.status_code, "Resposta inválida (JSON malformado)") from e

    async def _search(self, alias: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._post, alias, body)

    async def lookup(self, tribunal: str, process_number: str) -> LookupResult:
        """
        Consulta um processo e devolve o resultado como dado.

        Somente UnsupportedTribunal é levantada; qualquer outra falha vem como
        LookupNotFound ou LookupFailed.
        """
        alias = resolve_tribunal(tribunal)

        if self.mode == LookupMode.DEMO:
            if is_demo_number(process_number):
                return LookupOk(normalize_hit(demo_source(process_number), process_number, tribunal))
            return LookupFailed(DemoModeUnconfigured())

        digits = only_digits(process_number)
        try:
            payload = await self._search(alias, build_match_query(digits))
        except ConsultaError as e:
            logger.warning("Falha ao consultar %s em %s: %s", process_number, alias, e)
            return LookupFailed(e)

        hits = extract_hits(payload)
        if not hits:
            return LookupNotFound(str(NotFound()))
        return LookupOk(normalize_hit(hits[0], process_number, tribunal))

    async def fetch_one(self, tribunal: str, process_number: str) -> ProcessRecord:
        """Consulta um processo; levanta NotFound ou o erro original em caso de falha."""
        result = await self.lookup(tribunal, process_number)
        if isinstance(result, LookupOk):
            return result.record
        if isinstance(result, LookupNotFound):
            raise NotFound(result.message)
        raise result.error

    async def advanced_search(self, request: AdvancedSearchRequest) -> List[ProcessRecord]:
        alias = resolve_tribunal(request.tribunal)
        body = build_advanced_query(request)

        if self.mode == LookupMode.DEMO:
            terms = [request.processClass, request.judgingBody, request.searchTerm]
            if not any(is_demo_term(t or "") for t in terms):
                raise DemoModeUnconfigured()
            return [
                normalize_hit(demo_source(f"demo-{i + 1}", index=i), f"demo-{i + 1}", request.tribunal)
                for i in range(2)
            ]

        payload = await self._search(alias, body)
        hits = extract_hits(payload)
        if not hits:
            raise NotFound(ADVANCED_NOT_FOUND)
        return [normalize_hit(source, NOT_INFORMED, request.tribunal) for source in hits]
