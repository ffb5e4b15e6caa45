from fastapi import APIRouter, HTTPException
from typing import List
from ..models import SaveProcessRequest, SavedProcess, SearchHistoryEntry
from ..services.tribunals import list_tribunals
from .. import database

router = APIRouter(tags=["saved"])

@router.get("/tribunals")
def get_tribunals():
    return list_tribunals()

@router.get("/search-history", response_model=List[SearchHistoryEntry])
def search_history():
    return database.get_search_history()

# Favorites

@router.get("/favorites", response_model=List[SavedProcess])
def list_favorites():
    return database.get_favorites()

@router.get("/favorites/{process_number}", response_model=SavedProcess)
def get_favorite(process_number: str):
    favorite = database.get_favorite_by_key(process_number)
    if not favorite:
        raise HTTPException(status_code=404, detail="Favorito não encontrado")
    return favorite

@router.post("/favorites", response_model=SavedProcess)
def add_favorite(request: SaveProcessRequest):
    return database.add_favorite(request.processNumber, request.tribunal, request.processData)

@router.delete("/favorites/{process_number}")
def remove_favorite(process_number: str):
    if not database.remove_favorite(process_number):
        raise HTTPException(status_code=404, detail="Favorito não encontrado")
    return {"message": "Favorito removido com sucesso"}

# Follows

@router.get("/follows", response_model=List[SavedProcess])
def list_follows():
    return database.get_follows()

@router.get("/follows/{process_number}", response_model=SavedProcess)
def get_follow(process_number: str):
    follow = database.get_follow_by_key(process_number)
    if not follow:
        raise HTTPException(status_code=404, detail="Processo não acompanhado")
    return follow

@router.post("/follows", response_model=SavedProcess)
def add_follow(request: SaveProcessRequest):
    return database.add_follow(request.processNumber, request.tribunal, request.processData)

@router.delete("/follows/{process_number}")
def remove_follow(process_number: str):
    if not database.remove_follow(process_number):
        raise HTTPException(status_code=404, detail="Processo não acompanhado")
    return {"message": "Acompanhamento removido com sucesso"}
