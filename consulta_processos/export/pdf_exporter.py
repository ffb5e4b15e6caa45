"""PDF exporter that renders one page per process with subjects and movement history."""

from datetime import datetime
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.enums import TA_CENTER
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer

from ..models import Movement, ProcessRecord
from .formatting import format_date, parse_date

DEFAULT_TITLE = "Relatório de Processos"

_MARGIN = 50


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Title"], fontName="Helvetica-Bold", fontSize=16),
        "generated": ParagraphStyle("Generated", parent=base["Normal"], fontSize=10, alignment=TA_CENTER),
        "process": ParagraphStyle("Process", parent=base["Heading2"], fontName="Helvetica-Bold", fontSize=14),
        "section": ParagraphStyle("Section", parent=base["Heading3"], fontName="Helvetica-Bold", fontSize=12),
        "field": ParagraphStyle("Field", parent=base["Normal"], fontName="Helvetica", fontSize=10, leading=13),
        "note": ParagraphStyle("Note", parent=base["Normal"], fontName="Helvetica", fontSize=9,
                               leading=12, leftIndent=14),
    }


def _p(text: str, style: ParagraphStyle) -> Paragraph:
    return Paragraph(escape(text), style)


def movement_line(mov: Movement) -> str:
    """Bullet text for one movement; an unparseable timestamp is shown once, as received."""
    if parse_date(mov.dataHora) is None:
        return f"• {mov.dataHora} - {mov.nome}"
    return f"• {format_date(mov.dataHora, 'date')} {format_date(mov.dataHora, 'time')} - {mov.nome}"


def _process_flowables(record: ProcessRecord, styles: dict, include_movements: bool,
                       include_subjects: bool) -> list:
    story = [_p(f"Processo: {record.numeroProcesso}", styles["process"])]

    for label, value in (
        ("Classe Processual", record.classeProcessual),
        ("Tribunal", record.tribunal),
        ("Órgão Julgador", record.orgaoJulgador),
        ("Grau", record.grau),
        ("Sistema", f"{record.sistemaProcessual} ({record.formatoProcesso})"),
        ("Data de Ajuizamento", format_date(record.dataAjuizamento)),
        ("Última Atualização", format_date(record.ultimaAtualizacao)),
    ):
        story.append(_p(f"{label}: {value}", styles["field"]))
    story.append(Spacer(1, 12))

    if include_subjects and record.assuntos:
        story.append(_p("Assuntos:", styles["section"]))
        for subject in record.assuntos:
            story.append(_p(f"• {subject.nome} ({subject.codigo})", styles["field"]))
        story.append(Spacer(1, 12))

    if include_movements and record.movimentos:
        story.append(_p("Movimentações:", styles["section"]))
        for mov in record.movimentos:
            story.append(_p(movement_line(mov), styles["field"]))
            if mov.complemento:
                story.append(_p(mov.complemento, styles["note"]))

    return story


def export_pdf(
    records: List[ProcessRecord],
    title: Optional[str] = None,
    include_movements: bool = True,
    include_subjects: bool = True,
) -> bytes:
    """Render records as an A4 PDF.

    The title block opens the first page; every following process starts on
    a new page. Movements are listed in the order they were received. The
    bytes are returned only after the document has been fully built.
    """
    title = title or DEFAULT_TITLE
    styles = _styles()

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=_MARGIN,
        rightMargin=_MARGIN,
        topMargin=_MARGIN,
        bottomMargin=_MARGIN,
        title=title,
        creator="Consulta de Processos",
    )

    story = [
        _p(title, styles["title"]),
        _p(f"Gerado em: {datetime.now().strftime('%d/%m/%Y %H:%M:%S')}", styles["generated"]),
        Spacer(1, 24),
    ]
    for index, record in enumerate(records):
        if index > 0:
            story.append(PageBreak())
        story.extend(_process_flowables(record, styles, include_movements, include_subjects))

    doc.build(story)
    return buffer.getvalue()
