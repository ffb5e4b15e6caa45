"""
Registro dos tribunais atendidos pela API pública do DataJud.

O código do tribunal (ex.: "TJSP") é normalizado para o alias usado na
montagem do endpoint: api_publica_<alias>/_search.
"""

from typing import Dict, List

from ..errors import UnsupportedTribunal

SUPERIOR = "Superior"
FEDERAL = "Federal"
ESTADUAL = "Estadual"

TRIBUNAIS: Dict[str, Dict[str, str]] = {
    # Tribunais Superiores
    "stj": {"name": "Superior Tribunal de Justiça", "category": SUPERIOR},
    "stf": {"name": "Supremo Tribunal Federal", "category": SUPERIOR},
    "tst": {"name": "Tribunal Superior do Trabalho", "category": SUPERIOR},
    "tse": {"name": "Tribunal Superior Eleitoral", "category": SUPERIOR},
    "stm": {"name": "Superior Tribunal Militar", "category": SUPERIOR},
    # Justiça Federal
    "trf1": {"name": "TRF 1ª Região", "category": FEDERAL},
    "trf2": {"name": "TRF 2ª Região", "category": FEDERAL},
    "trf3": {"name": "TRF 3ª Região", "category": FEDERAL},
    "trf4": {"name": "TRF 4ª Região", "category": FEDERAL},
    "trf5": {"name": "TRF 5ª Região", "category": FEDERAL},
    "trf6": {"name": "TRF 6ª Região", "category": FEDERAL},
    # Justiça Estadual
    "tjac": {"name": "Tribunal de Justiça do Acre", "category": ESTADUAL},
    "tjal": {"name": "Tribunal de Justiça de Alagoas", "category": ESTADUAL},
    "tjam": {"name": "Tribunal de Justiça do Amazonas", "category": ESTADUAL},
    "tjap": {"name": "Tribunal de Justiça do Amapá", "category": ESTADUAL},
    "tjba": {"name": "Tribunal de Justiça da Bahia", "category": ESTADUAL},
    "tjce": {"name": "Tribunal de Justiça do Ceará", "category": ESTADUAL},
    "tjdft": {"name": "Tribunal de Justiça do Distrito Federal", "category": ESTADUAL},
    "tjes": {"name": "Tribunal de Justiça do Espírito Santo", "category": ESTADUAL},
    "tjgo": {"name": "Tribunal de Justiça de Goiás", "category": ESTADUAL},
    "tjma": {"name": "Tribunal de Justiça do Maranhão", "category": ESTADUAL},
    "tjmg": {"name": "Tribunal de Justiça de Minas Gerais", "category": ESTADUAL},
    "tjms": {"name": "Tribunal de Justiça de Mato Grosso do Sul", "category": ESTADUAL},
    "tjmt": {"name": "Tribunal de Justiça de Mato Grosso", "category": ESTADUAL},
    "tjpa": {"name": "Tribunal de Justiça do Pará", "category": ESTADUAL},
    "tjpb": {"name": "Tribunal de Justiça da Paraíba", "category": ESTADUAL},
    "tjpe": {"name": "Tribunal de Justiça de Pernambuco", "category": ESTADUAL},
    "tjpi": {"name": "Tribunal de Justiça do Piauí", "category": ESTADUAL},
    "tjpr": {"name": "Tribunal de Justiça do Paraná", "category": ESTADUAL},
    "tjrj": {"name": "Tribunal de Justiça do Rio de Janeiro", "category": ESTADUAL},
    "tjrn": {"name": "Tribunal de Justiça do Rio Grande do Norte", "category": ESTADUAL},
    "tjro": {"name": "Tribunal de Justiça de Rondônia", "category": ESTADUAL},
    "tjrr": {"name": "Tribunal de Justiça de Roraima", "category": ESTADUAL},
    "tjrs": {"name": "Tribunal de Justiça do Rio Grande do Sul", "category": ESTADUAL},
    "tjsc": {"name": "Tribunal de Justiça de Santa Catarina", "category": ESTADUAL},
    "tjse": {"name": "Tribunal de Justiça de Sergipe", "category": ESTADUAL},
    "tjsp": {"name": "Tribunal de Justiça de São Paulo", "category": ESTADUAL},
    "tjto": {"name": "Tribunal de Justiça do Tocantins", "category": ESTADUAL},
}


def resolve_tribunal(code: str) -> str:
    """Retorna o alias DataJud do tribunal ou levanta UnsupportedTribunal."""
    alias = (code or "").strip().lower()
    if alias not in TRIBUNAIS:
        raise UnsupportedTribunal(code)
    return alias


def list_tribunals() -> List[Dict[str, str]]:
    return [{"code": code, **info} for code, info in TRIBUNAIS.items()]
