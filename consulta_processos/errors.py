"""Error taxonomy shared by the lookup client, bulk search and export engine."""

from typing import Optional


class ConsultaError(Exception):
    """Base class for every error raised by the core."""


class UnsupportedTribunal(ConsultaError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Tribunal não suportado: {code}")


class InvalidRequest(ConsultaError):
    pass


class NotFound(ConsultaError):
    def __init__(self, message: str = "Processo não encontrado"):
        super().__init__(message)


class UpstreamError(ConsultaError):
    """The DataJud call did not return a successful response."""

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"Erro na API DataJud: {body}")
        else:
            super().__init__(f"Erro na API DataJud: {status} - {body}")


class DemoModeUnconfigured(ConsultaError):
    def __init__(self, message: str = "Modo demonstração: Configure DATAJUD_API_KEY"):
        super().__init__(message)


class EmptyInput(ConsultaError):
    def __init__(self, message: str = "Nenhum dado fornecido para exportação"):
        super().__init__(message)


class UnsupportedFormat(ConsultaError):
    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"Formato de exportação não suportado: {fmt}")


class ExportFailed(ConsultaError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Erro na exportação de dados: {cause}")
