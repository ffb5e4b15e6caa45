"""Export entry point: validates the request and dispatches to the format renderers."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from ..errors import EmptyInput, ExportFailed, UnsupportedFormat
from ..models import ProcessRecord
from .csv_exporter import export_csv
from .excel_exporter import export_excel
from .json_exporter import export_json
from .pdf_exporter import export_pdf

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    PDF = "pdf"
    CSV = "csv"
    EXCEL = "excel"
    JSON = "json"


class ExportOptions(BaseModel):
    title: Optional[str] = None
    includeMovements: bool = True
    includeSubjects: bool = True


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    media_type: str
    filename: str


_MEDIA_TYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.CSV: "text/csv; charset=utf-8",
    ExportFormat.EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.JSON: "application/json; charset=utf-8",
}

_EXTENSIONS = {
    ExportFormat.PDF: "pdf",
    ExportFormat.CSV: "csv",
    ExportFormat.EXCEL: "xlsx",
    ExportFormat.JSON: "json",
}


def parse_format(fmt) -> ExportFormat:
    try:
        return ExportFormat(fmt)
    except ValueError:
        raise UnsupportedFormat(str(fmt)) from None


def export_filename(fmt: ExportFormat, day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"processos_{day.isoformat()}.{_EXTENSIONS[fmt]}"


def _render(records: List[ProcessRecord], fmt: ExportFormat, options: ExportOptions) -> bytes:
    if fmt == ExportFormat.PDF:
        return export_pdf(records, options.title, options.includeMovements, options.includeSubjects)
    if fmt == ExportFormat.CSV:
        return export_csv(records, options.includeMovements, options.includeSubjects)
    if fmt == ExportFormat.EXCEL:
        return export_excel(records, options.includeMovements, options.includeSubjects)
    return export_json(records, options.title, options.includeMovements, options.includeSubjects)


def export_processes(
    records: List[ProcessRecord],
    fmt,
    options: Optional[ExportOptions] = None,
) -> ExportResult:
    """
    Renders the records in the requested format.

    Raises EmptyInput for an empty list, UnsupportedFormat for an unknown
    format and ExportFailed when the renderer breaks (nothing partial is
    returned).
    """
    if not records:
        raise EmptyInput()
    export_format = parse_format(fmt)
    options = options or ExportOptions()

    try:
        content = _render(records, export_format, options)
    except Exception as e:
        logger.exception("Falha ao exportar %d processos em %s", len(records), export_format.value)
        raise ExportFailed(e) from e

    logger.info("Exportados %d processos em %s (%d bytes)", len(records), export_format.value, len(content))
    return ExportResult(
        content=content,
        media_type=_MEDIA_TYPES[export_format],
        filename=export_filename(export_format),
    )
