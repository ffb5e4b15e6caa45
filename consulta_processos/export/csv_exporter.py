"""CSV exporter: one row per process, nested collections flattened into text columns."""

import csv
from typing import Any, Dict, List

import pandas as pd

from ..models import ProcessRecord
from .formatting import format_date, latest_movements, movement_history

IDENTITY_COLUMNS = [
    "Número do Processo",
    "Classe Processual",
    "Código Classe",
    "Tribunal",
    "Órgão Julgador",
    "Grau",
    "Sistema",
    "Formato",
    "Data de Ajuizamento",
    "Última Atualização",
]

SUBJECT_COLUMNS = ["Assuntos", "Códigos dos Assuntos"]

LATEST_MOVEMENT_COLUMNS = [
    ("Último Andamento", "Data Último Andamento"),
    ("Penúltimo Andamento", "Data Penúltimo Andamento"),
    ("Antepenúltimo Andamento", "Data Antepenúltimo Andamento"),
]

MOVEMENT_COUNT_COLUMN = "Total de Movimentações"
HISTORY_COLUMN = "Histórico Completo de Movimentações"

CSV_COLUMNS = (
    IDENTITY_COLUMNS
    + SUBJECT_COLUMNS
    + [MOVEMENT_COUNT_COLUMN]
    + [col for pair in LATEST_MOVEMENT_COLUMNS for col in pair]
    + [HISTORY_COLUMN]
)


def identity_row(record: ProcessRecord) -> Dict[str, Any]:
    return {
        "Número do Processo": record.numeroProcesso,
        "Classe Processual": record.classeProcessual,
        "Código Classe": record.codigoClasseProcessual,
        "Tribunal": record.tribunal,
        "Órgão Julgador": record.orgaoJulgador,
        "Grau": record.grau,
        "Sistema": record.sistemaProcessual,
        "Formato": record.formatoProcesso,
        "Data de Ajuizamento": format_date(record.dataAjuizamento),
        "Última Atualização": format_date(record.ultimaAtualizacao),
    }


def latest_movement_row(record: ProcessRecord, include_movements: bool) -> Dict[str, str]:
    row = {}
    recent = latest_movements(record, len(LATEST_MOVEMENT_COLUMNS)) if include_movements else []
    for i, (name_col, date_col) in enumerate(LATEST_MOVEMENT_COLUMNS):
        mov = recent[i] if i < len(recent) else None
        row[name_col] = mov.nome if mov else ""
        row[date_col] = format_date(mov.dataHora) if mov else ""
    return row


def csv_row(record: ProcessRecord, include_movements: bool, include_subjects: bool) -> Dict[str, Any]:
    row = identity_row(record)

    if include_subjects and record.assuntos:
        row["Assuntos"] = "; ".join(s.nome for s in record.assuntos)
        row["Códigos dos Assuntos"] = "; ".join(str(s.codigo) for s in record.assuntos)
    else:
        row["Assuntos"] = ""
        row["Códigos dos Assuntos"] = ""

    with_movements = include_movements and bool(record.movimentos)
    row[MOVEMENT_COUNT_COLUMN] = len(record.movimentos) if with_movements else 0
    row.update(latest_movement_row(record, with_movements))
    row[HISTORY_COLUMN] = movement_history(record) if with_movements else ""
    return row


def export_csv(
    records: List[ProcessRecord],
    include_movements: bool = True,
    include_subjects: bool = True,
) -> bytes:
    """Render records as CSV (all fields quoted, UTF-8 with BOM).

    The header is the same for any input; disabled or empty sections are
    written as blank cells.
    """
    rows = [csv_row(r, include_movements, include_subjects) for r in records]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    return df.to_csv(index=False, quoting=csv.QUOTE_ALL).encode("utf-8-sig")
