from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum
import uuid

NOT_INFORMED = "Não informado"

class Subject(BaseModel):
    codigo: int
    nome: str

class TabulatedComplement(BaseModel):
    codigo: int
    valor: int
    nome: str
    descricao: str

class MovementBody(BaseModel):
    codigoOrgao: int
    nomeOrgao: str

class Movement(BaseModel):
    codigo: Optional[int] = None
    nome: str
    dataHora: str
    complemento: Optional[str] = None
    complementosTabelados: List[TabulatedComplement] = []
    orgaoJulgador: Optional[MovementBody] = None

class ProcessRecord(BaseModel):
    numeroProcesso: str
    classeProcessual: str = NOT_INFORMED
    codigoClasseProcessual: int = 0
    sistemaProcessual: str = NOT_INFORMED
    codigoSistema: Optional[int] = None
    formatoProcesso: str = NOT_INFORMED
    codigoFormato: Optional[int] = None
    tribunal: str
    ultimaAtualizacao: str = NOT_INFORMED
    grau: str = NOT_INFORMED
    dataAjuizamento: str = NOT_INFORMED
    nivelSigilo: Optional[int] = None
    movimentos: List[Movement] = []
    orgaoJulgador: str = NOT_INFORMED
    codigoOrgaoJulgador: Optional[int] = None
    codigoMunicipio: Optional[int] = None
    assuntos: List[Subject] = []

class BulkStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"

class BulkOutcome(BaseModel):
    processNumber: str
    record: Optional[ProcessRecord] = None
    errorMessage: Optional[str] = None
    status: BulkStatus

    @model_validator(mode="after")
    def _check_payload(self):
        if self.status == BulkStatus.SUCCESS:
            if self.record is None or self.errorMessage is not None:
                raise ValueError("success outcome must carry a record and no error message")
        elif self.record is not None or self.errorMessage is None:
            raise ValueError(f"{self.status.value} outcome must carry an error message and no record")
        return self

# Requests accepted by the HTTP layer

class ProcessSearchRequest(BaseModel):
    processNumber: str = Field(min_length=1)
    tribunal: str = Field(min_length=1)

class AdvancedSearchRequest(BaseModel):
    tribunal: str = Field(min_length=1)
    processClass: Optional[str] = None
    judgingBody: Optional[str] = None
    filingDateFrom: Optional[str] = None
    filingDateTo: Optional[str] = None
    searchTerm: Optional[str] = None

class BulkSearchRequest(BaseModel):
    tribunal: str = Field(min_length=1)
    processNumbers: List[str]

class ExportRequest(BaseModel):
    format: str
    data: List[ProcessRecord]
    title: Optional[str] = None
    includeMovements: bool = True
    includeSubjects: bool = True

# Stored entities

class SearchHistoryEntry(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    processNumber: str
    tribunal: str
    searchedAt: datetime = Field(default_factory=datetime.now)
    resultData: Optional[ProcessRecord] = None

class SavedProcess(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    processNumber: str
    tribunal: str
    addedAt: datetime = Field(default_factory=datetime.now)
    processData: ProcessRecord

class SaveProcessRequest(BaseModel):
    processNumber: str = Field(min_length=1)
    tribunal: str = Field(min_length=1)
    processData: ProcessRecord
