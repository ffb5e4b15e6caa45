"""
Dados de demonstração usados quando nenhuma DATAJUD_API_KEY está configurada.

As fixtures têm o formato bruto do `_source` do DataJud e passam pelo mesmo
normalizador das respostas reais.
"""

from typing import Any, Dict

DEMO_NUMBERS = ("0000000-00.0000.0.00.0000", "demo-process-123")

def is_demo_number(process_number: str) -> bool:
    return process_number in DEMO_NUMBERS or "demo" in process_number.lower()

def is_demo_term(value: str) -> bool:
    return bool(value) and "demo" in value.lower()

def demo_source(process_number: str, index: int = 0) -> Dict[str, Any]:
    seq = index + 1
    day = 15 + index % 14
    return {
        "numeroProcesso": process_number,
        "classe": {"codigo": 12729, "nome": "Ação Civil Pública"},
        "sistema": {"codigo": 3, "nome": "PJe"},
        "formato": {"codigo": 1, "nome": "Eletrônico"},
        "dataHoraUltimaAtualizacao": "2023-03-15T09:30:00.000Z",
        "grau": "G1",
        "dataAjuizamento": f"2023-01-{day:02d}T00:00:00.000Z",
        "nivelSigilo": 0,
        "orgaoJulgador": {
            "codigo": 9700 + index,
            "nome": f"{seq}ª Vara Cível",
            "codigoMunicipioIBGE": 3550308,
        },
        "assuntos": [
            {"codigo": 10518, "nome": "Responsabilidade Civil"},
            {"codigo": 10520, "nome": "Dano Material"},
        ],
        "movimentos": [
            {
                "codigo": 26,
                "nome": "Distribuição",
                "dataHora": f"2023-01-{day:02d}T10:00:00.000Z",
                "complemento": "Processo distribuído para análise",
                "complementosTabelados": [
                    {
                        "codigo": 2,
                        "valor": 1,
                        "nome": "competência exclusiva",
                        "descricao": "tipo_de_distribuicao_redistribuicao",
                    }
                ],
            },
            {
                "codigo": 193,
                "nome": "Citação",
                "dataHora": "2023-02-01T14:30:00.000Z",
                "complemento": "Citação realizada com sucesso",
            },
            {
                "codigo": 970,
                "nome": "Audiência de Conciliação",
                "dataHora": "2023-03-15T09:00:00.000Z",
                "complemento": "Audiência realizada - sem acordo",
            },
        ],
    }
