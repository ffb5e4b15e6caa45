"""JSON exporter: records wrapped in a metadata envelope."""

import json
from datetime import datetime, timezone
from typing import List, Optional

from ..models import ProcessRecord


def export_json(
    records: List[ProcessRecord],
    title: Optional[str] = None,
    include_movements: bool = True,
    include_subjects: bool = True,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Render records as a JSON document.

    Each process keeps the ProcessRecord field order. ``movimentos`` and
    ``assuntos`` are dropped from every process when their flag is off; the
    flags themselves are recorded in the envelope.
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    processes = []
    for record in records:
        data = record.model_dump(mode="json")
        if not include_movements:
            del data["movimentos"]
        if not include_subjects:
            del data["assuntos"]
        processes.append(data)

    metadata = {
        "geradoEm": generated_at.isoformat(),
        "totalProcessos": len(records),
        "includeMovimentos": include_movements,
        "includeAssuntos": include_subjects,
        "titulo": title or None,
    }

    document = {"metadata": metadata, "processos": processes}
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")
