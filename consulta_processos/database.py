import json
import os
from typing import Iterable, List, Optional, Tuple, TypeVar, Type
from pydantic import BaseModel
from .config import Config
from .models import ProcessRecord, SavedProcess, SearchHistoryEntry

HISTORY_FILE = "search_history.json"
FAVORITES_FILE = "favorites.json"
FOLLOWS_FILE = "follows.json"

HISTORY_LIMIT = 10

T = TypeVar("T", bound=BaseModel)

def _path(filename: str) -> str:
    return os.path.join(Config.DATA_DIR, filename)

def _load(filename: str, model: Type[T]) -> List[T]:
    path = _path(filename)
    if not os.path.exists(path):
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
        return [model(**d) for d in data]

def _save(filename: str, items: List[BaseModel]):
    os.makedirs(Config.DATA_DIR, exist_ok=True)
    with open(_path(filename), "w", encoding="utf-8") as f:
        json.dump([i.model_dump(mode='json') for i in items], f, indent=2, ensure_ascii=False)

# Search history

def add_search_history(process_number: str, tribunal: str, record: Optional[ProcessRecord] = None) -> SearchHistoryEntry:
    return add_search_history_many(tribunal, [(process_number, record)])[0]

def add_search_history_many(tribunal: str, items: Iterable[Tuple[str, Optional[ProcessRecord]]]) -> List[SearchHistoryEntry]:
    """Append several searches with a single write. Only the newest HISTORY_LIMIT entries are kept."""
    new_entries = [
        SearchHistoryEntry(processNumber=number, tribunal=tribunal, resultData=record)
        for number, record in items
    ]
    if not new_entries:
        return []
    entries = _load(HISTORY_FILE, SearchHistoryEntry) + new_entries
    _save(HISTORY_FILE, entries[-HISTORY_LIMIT:])
    return new_entries

def get_search_history() -> List[SearchHistoryEntry]:
    """Last searches, newest first."""
    entries = _load(HISTORY_FILE, SearchHistoryEntry)
    # Stable sort keeps insertion order for identical timestamps; reverse it first
    entries = list(reversed(entries))
    entries.sort(key=lambda e: e.searchedAt, reverse=True)
    return entries[:HISTORY_LIMIT]

# Favorites and follows share the same storage shape: one entry per process number

def _add_saved(filename: str, process_number: str, tribunal: str, record: ProcessRecord) -> SavedProcess:
    items = _load(filename, SavedProcess)
    # Replace existing entry for the same process
    items = [i for i in items if i.processNumber != process_number]
    saved = SavedProcess(processNumber=process_number, tribunal=tribunal, processData=record)
    items.append(saved)
    _save(filename, items)
    return saved

def _remove_saved(filename: str, process_number: str) -> bool:
    items = _load(filename, SavedProcess)
    remaining = [i for i in items if i.processNumber != process_number]
    if len(remaining) == len(items):
        return False
    _save(filename, remaining)
    return True

def _get_saved(filename: str) -> List[SavedProcess]:
    items = _load(filename, SavedProcess)
    items = list(reversed(items))
    items.sort(key=lambda i: i.addedAt, reverse=True)
    return items

def _get_saved_by_key(filename: str, process_number: str) -> Optional[SavedProcess]:
    return next((i for i in _load(filename, SavedProcess) if i.processNumber == process_number), None)

def add_favorite(process_number: str, tribunal: str, record: ProcessRecord) -> SavedProcess:
    return _add_saved(FAVORITES_FILE, process_number, tribunal, record)

def remove_favorite(process_number: str) -> bool:
    return _remove_saved(FAVORITES_FILE, process_number)

def get_favorites() -> List[SavedProcess]:
    return _get_saved(FAVORITES_FILE)

def get_favorite_by_key(process_number: str) -> Optional[SavedProcess]:
    return _get_saved_by_key(FAVORITES_FILE, process_number)

def add_follow(process_number: str, tribunal: str, record: ProcessRecord) -> SavedProcess:
    return _add_saved(FOLLOWS_FILE, process_number, tribunal, record)

def remove_follow(process_number: str) -> bool:
    return _remove_saved(FOLLOWS_FILE, process_number)

def get_follows() -> List[SavedProcess]:
    return _get_saved(FOLLOWS_FILE)

def get_follow_by_key(process_number: str) -> Optional[SavedProcess]:
    return _get_saved_by_key(FOLLOWS_FILE, process_number)
