from fastapi import APIRouter, Response
from ..models import ExportRequest
from ..export.engine import ExportOptions, export_processes

router = APIRouter(prefix="/export", tags=["export"])

@router.post("")
def export_endpoint(request: ExportRequest):
    """
    Export the given processes as PDF, CSV, Excel or JSON.
    """
    options = ExportOptions(
        title=request.title,
        includeMovements=request.includeMovements,
        includeSubjects=request.includeSubjects,
    )
    result = export_processes(request.data, request.format, options)

    headers = {
        'Content-Disposition': f'attachment; filename="{result.filename}"'
    }

    return Response(content=result.content, media_type=result.media_type, headers=headers)
