"""Spreadsheet exporter: a summary sheet plus one row per movement and per subject."""

from io import BytesIO
from typing import Any, Dict, List

import pandas as pd
from openpyxl.utils import get_column_letter

from ..models import ProcessRecord
from .csv_exporter import HISTORY_COLUMN, csv_row
from .formatting import format_date

PROCESSES_SHEET = "Processos"
MOVEMENTS_SHEET = "Movimentações"
SUBJECTS_SHEET = "Assuntos"

PROCESS_COLUMNS = [
    "Número do Processo",
    "Classe Processual",
    "Código Classe",
    "Tribunal",
    "Órgão Julgador",
    "Código Órgão Julgador",
    "Grau",
    "Sistema",
    "Código Sistema",
    "Formato",
    "Código Formato",
    "Data de Ajuizamento",
    "Última Atualização",
    "Nível de Sigilo",
    "Código Município",
    "Assuntos",
    "Códigos dos Assuntos",
    "Total de Movimentações",
    "Último Andamento",
    "Data Último Andamento",
    "Penúltimo Andamento",
    "Data Penúltimo Andamento",
    "Antepenúltimo Andamento",
    "Data Antepenúltimo Andamento",
]

MOVEMENT_COLUMNS = [
    "Número do Processo",
    "Sequência",
    "Data",
    "Hora",
    "Código Movimento",
    "Nome do Movimento",
    "Complemento",
    "Órgão Julgador",
]

SUBJECT_COLUMNS = ["Número do Processo", "Código", "Nome"]

# Widths of the summary sheet, in PROCESS_COLUMNS order
_PROCESS_WIDTHS = [25, 30, 15, 12, 30, 20, 10, 15, 15, 15, 15, 18, 18, 15, 15, 50, 30, 22, 50, 18, 50, 18, 50, 18]


def _blank(value: Any) -> Any:
    return "" if value is None else value


def process_row(record: ProcessRecord, include_movements: bool, include_subjects: bool) -> Dict[str, Any]:
    row = csv_row(record, include_movements, include_subjects)
    row.pop(HISTORY_COLUMN)
    row.update({
        "Código Órgão Julgador": _blank(record.codigoOrgaoJulgador),
        "Código Sistema": _blank(record.codigoSistema),
        "Código Formato": _blank(record.codigoFormato),
        "Nível de Sigilo": _blank(record.nivelSigilo),
        "Código Município": _blank(record.codigoMunicipio),
    })
    return row


def movement_rows(records: List[ProcessRecord]) -> List[Dict[str, Any]]:
    rows = []
    for record in records:
        for seq, mov in enumerate(record.movimentos, start=1):
            rows.append({
                "Número do Processo": record.numeroProcesso,
                "Sequência": seq,
                "Data": format_date(mov.dataHora, "date"),
                "Hora": format_date(mov.dataHora, "time"),
                "Código Movimento": _blank(mov.codigo),
                "Nome do Movimento": mov.nome,
                "Complemento": mov.complemento or "",
                "Órgão Julgador": mov.orgaoJulgador.nomeOrgao if mov.orgaoJulgador else "",
            })
    return rows


def subject_rows(records: List[ProcessRecord]) -> List[Dict[str, Any]]:
    return [
        {"Número do Processo": record.numeroProcesso, "Código": s.codigo, "Nome": s.nome}
        for record in records
        for s in record.assuntos
    ]


def export_excel(
    records: List[ProcessRecord],
    include_movements: bool = True,
    include_subjects: bool = True,
) -> bytes:
    main_df = pd.DataFrame(
        [process_row(r, include_movements, include_subjects) for r in records],
        columns=PROCESS_COLUMNS,
    )

    output = BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        main_df.to_excel(writer, index=False, sheet_name=PROCESSES_SHEET)
        sheet = writer.sheets[PROCESSES_SHEET]
        for i, width in enumerate(_PROCESS_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(i)].width = width

        if include_movements:
            mov_df = pd.DataFrame(movement_rows(records), columns=MOVEMENT_COLUMNS)
            mov_df.to_excel(writer, index=False, sheet_name=MOVEMENTS_SHEET)

        if include_subjects:
            subj_df = pd.DataFrame(subject_rows(records), columns=SUBJECT_COLUMNS)
            subj_df.to_excel(writer, index=False, sheet_name=SUBJECTS_SHEET)

    return output.getvalue()
