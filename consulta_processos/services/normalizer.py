from typing import Any, Dict, List, Optional
from ..models import (
    NOT_INFORMED,
    Movement,
    MovementBody,
    ProcessRecord,
    Subject,
    TabulatedComplement,
)

# The DataJud payload shape varies between tribunals (objects vs plain
# strings, nested subject arrays, missing blocks). Everything that inspects the
# raw document lives here; the rest of the code only sees ProcessRecord.

def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}

def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None

def _text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None

def _first_text(*values: Any, default: str = NOT_INFORMED) -> str:
    for value in values:
        text = _text(value)
        if text is not None:
            return text
    return default

def _named(value: Any) -> Optional[str]:
    """Name of a {codigo, nome} block, or the value itself when it is a plain string."""
    if isinstance(value, dict):
        return _text(value.get("nome"))
    return _text(value)

def _code(value: Any) -> Optional[int]:
    if isinstance(value, dict):
        return _as_int(value.get("codigo"))
    return None

def _normalize_complements(raw: Any) -> List[TabulatedComplement]:
    complements = []
    for item in raw if isinstance(raw, list) else []:
        item = _as_dict(item)
        codigo = _as_int(item.get("codigo"))
        valor = _as_int(item.get("valor"))
        if codigo is None or valor is None:
            continue
        complements.append(TabulatedComplement(
            codigo=codigo,
            valor=valor,
            nome=_first_text(item.get("nome"), default=""),
            descricao=_first_text(item.get("descricao"), default=""),
        ))
    return complements

def _normalize_movement_body(raw: Any) -> Optional[MovementBody]:
    raw = _as_dict(raw)
    codigo = _as_int(raw.get("codigoOrgao"))
    nome = _text(raw.get("nomeOrgao"))
    if codigo is None or nome is None:
        return None
    return MovementBody(codigoOrgao=codigo, nomeOrgao=nome)

def _normalize_movement(raw: Any) -> Movement:
    raw = _as_dict(raw)
    return Movement(
        codigo=_as_int(raw.get("codigo")),
        nome=_first_text(raw.get("nome")),
        dataHora=_first_text(raw.get("dataHora"), raw.get("data")),
        complemento=_text(raw.get("complemento")),
        complementosTabelados=_normalize_complements(raw.get("complementosTabelados")),
        orgaoJulgador=_normalize_movement_body(raw.get("orgaoJulgador")),
    )

def _flatten(items: Any) -> List[Any]:
    if not isinstance(items, list):
        return []
    flat = []
    for item in items:
        if isinstance(item, list):
            flat.extend(_flatten(item))
        else:
            flat.append(item)
    return flat

def _normalize_subjects(raw: Any) -> List[Subject]:
    subjects = []
    for item in _flatten(raw):
        item = _as_dict(item)
        codigo = _as_int(item.get("codigo"))
        if codigo is None:
            continue
        subjects.append(Subject(codigo=codigo, nome=_first_text(item.get("nome"))))
    return subjects

def normalize_hit(raw: Any, requested_id: str, tribunal: str) -> ProcessRecord:
    """
    Converts one DataJud `_source` document into a ProcessRecord.

    Pure and total: missing or malformed blocks become the "Não informado"
    sentinel (or None for optional codes), never an exception.
    """
    source = _as_dict(raw)
    classe = source.get("classe")
    sistema = source.get("sistema")
    formato = source.get("formato")
    orgao = _as_dict(source.get("orgaoJulgador"))
    movimentos = source.get("movimentos")

    return ProcessRecord(
        numeroProcesso=_first_text(source.get("numeroProcesso"), default=requested_id),
        classeProcessual=_first_text(_named(classe) if isinstance(classe, dict) else None),
        codigoClasseProcessual=_code(classe) or 0,
        sistemaProcessual=_first_text(_named(sistema)),
        codigoSistema=_code(sistema),
        formatoProcesso=_first_text(_named(formato)),
        codigoFormato=_code(formato),
        tribunal=(tribunal or "").upper(),
        ultimaAtualizacao=_first_text(
            source.get("dataHoraUltimaAtualizacao"),
            source.get("dataUltimaAtualizacao"),
        ),
        grau=_first_text(source.get("grau")),
        dataAjuizamento=_first_text(source.get("dataAjuizamento")),
        nivelSigilo=_as_int(source.get("nivelSigilo")),
        movimentos=[_normalize_movement(m) for m in (movimentos if isinstance(movimentos, list) else [])],
        orgaoJulgador=_first_text(orgao.get("nome")),
        codigoOrgaoJulgador=_as_int(orgao.get("codigo")),
        codigoMunicipio=_as_int(orgao.get("codigoMunicipioIBGE")),
        assuntos=_normalize_subjects(source.get("assuntos")),
    )

def extract_hits(payload: Any) -> List[Any]:
    """Returns the `_source` documents of a `{hits: {hits: [...]}}` response."""
    hits = _as_dict(_as_dict(payload).get("hits")).get("hits")
    if not isinstance(hits, list):
        return []
    return [_as_dict(hit).get("_source") for hit in hits]

def normalize_response(payload: Any, requested_id: str, tribunal: str) -> List[ProcessRecord]:
    return [normalize_hit(source, requested_id, tribunal) for source in extract_hits(payload)]
