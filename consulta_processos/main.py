import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Config
from .errors import (
    ConsultaError,
    DemoModeUnconfigured,
    EmptyInput,
    ExportFailed,
    InvalidRequest,
    NotFound,
    UnsupportedFormat,
    UnsupportedTribunal,
    UpstreamError,
)
from .routers import processes, export, saved

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Consulta de Processos DataJud")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Allow all for dev
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(processes.router)
app.include_router(export.router)
app.include_router(saved.router)

ERROR_STATUS = {
    UnsupportedTribunal: 400,
    InvalidRequest: 400,
    DemoModeUnconfigured: 400,
    EmptyInput: 400,
    UnsupportedFormat: 400,
    NotFound: 404,
    UpstreamError: 502,
    ExportFailed: 500,
}

@app.exception_handler(ConsultaError)
async def consulta_error_handler(request: Request, exc: ConsultaError):
    status_code = next((code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})

@app.get("/health")
def health():
    return {"status": "ok"}
