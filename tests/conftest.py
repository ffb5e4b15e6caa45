"""
Shared fixtures: raw DataJud documents, canonical records and a stubbed
requests session standing in for the DataJud endpoint.
"""
import copy
import json
from unittest.mock import MagicMock

import pytest

from consulta_processos.config import Config
from consulta_processos.models import Movement, ProcessRecord, Subject
from consulta_processos.services.datajud_client import DataJudClient, LookupMode


RAW_SOURCE = {
    "numeroProcesso": "00008323520184013202",
    "classe": {"codigo": 436, "nome": "Procedimento do Juizado Especial Cível"},
    "sistema": {"codigo": 1, "nome": "Pje"},
    "formato": {"codigo": 1, "nome": "Eletrônico"},
    "tribunal": "TRF1",
    "dataHoraUltimaAtualizacao": "2023-07-21T19:14:15.000Z",
    "grau": "JE",
    "dataAjuizamento": "2018-10-29T00:00:00.000Z",
    "nivelSigilo": 0,
    "orgaoJulgador": {"codigoMunicipioIBGE": 1302603, "codigo": 16403, "nome": "JEF Adj - Tefé"},
    "assuntos": [
        {"codigo": 6177, "nome": "Concessão"},
        {"codigo": 6108, "nome": "Aposentadoria por Idade (Art. 48/51)"},
    ],
    "movimentos": [
        {
            "codigo": 26,
            "nome": "Distribuição",
            "dataHora": "2018-10-30T14:06:24.000Z",
            "complementosTabelados": [
                {"codigo": 2, "valor": 1, "nome": "competência exclusiva", "descricao": "tipo_de_distribuicao_redistribuicao"}
            ],
            "orgaoJulgador": {"codigoOrgao": 16403, "nomeOrgao": "JEF Adj - Tefé"},
        },
        {
            "codigo": 193,
            "nome": "Citação",
            "dataHora": "2019-02-01T10:30:00.000Z",
            "complemento": "Citação realizada",
        },
        {
            "codigo": 246,
            "nome": "Definitivo",
            "dataHora": "2020-05-12T16:00:00.000Z",
        },
    ],
}


@pytest.fixture
def raw_source():
    return copy.deepcopy(RAW_SOURCE)


def make_record(number="0001234-56.2023.8.26.0100", movements=3, subjects=2) -> ProcessRecord:
    return ProcessRecord(
        numeroProcesso=number,
        classeProcessual="Procedimento Comum Cível",
        codigoClasseProcessual=7,
        sistemaProcessual="PJe",
        codigoSistema=1,
        formatoProcesso="Eletrônico",
        codigoFormato=1,
        tribunal="TJSP",
        ultimaAtualizacao="2023-07-21T19:14:15.000Z",
        grau="G1",
        dataAjuizamento="2023-01-15T00:00:00.000Z",
        nivelSigilo=0,
        movimentos=[
            Movement(
                codigo=100 + i,
                nome=f"Movimento {i + 1}",
                dataHora=f"2023-0{i % 9 + 1}-10T1{i % 10}:00:00.000Z",
                complemento=f"Complemento {i + 1}" if i % 2 == 0 else None,
            )
            for i in range(movements)
        ],
        orgaoJulgador="1ª Vara Cível",
        codigoOrgaoJulgador=9700,
        codigoMunicipio=3550308,
        assuntos=[Subject(codigo=10000 + i, nome=f"Assunto {i + 1}") for i in range(subjects)],
    )


@pytest.fixture
def record():
    return make_record()


def hits(*sources):
    return {"hits": {"total": {"value": len(sources)}, "hits": [{"_source": s} for s in sources]}}


def make_response(status=200, payload=None, text=None):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.text = text if text is not None else json.dumps(payload)
    response.json.return_value = payload
    return response


def make_session(responder):
    """A MagicMock session whose post() answers with responder(url, body)."""
    session = MagicMock()

    def post(url, json=None, headers=None, timeout=None):
        return responder(url, json)

    session.post.side_effect = post
    return session


def requested_digits(body):
    return body["query"]["match"]["numeroProcesso"]


@pytest.fixture
def live_client_factory():
    def factory(responder):
        session = make_session(responder)
        client = DataJudClient(
            api_key="test-key",
            base_url="https://datajud.test/",
            mode=LookupMode.LIVE,
            session=session,
        )
        return client, session
    return factory


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "DATA_DIR", str(tmp_path))
    return tmp_path
