import json

from consulta_processos import database

from conftest import make_record


def test_history_keeps_last_ten_newest_first(data_dir):
    for i in range(12):
        database.add_search_history(f"proc-{i}", "tjsp", make_record(f"proc-{i}"))

    history = database.get_search_history()
    assert len(history) == 10
    assert [h.processNumber for h in history[:3]] == ["proc-11", "proc-10", "proc-9"]
    assert history[0].resultData.numeroProcesso == "proc-11"


def test_history_without_result(data_dir):
    entry = database.add_search_history("proc-1", "tjsp")
    assert entry.resultData is None
    assert database.get_search_history()[0].id == entry.id


def test_empty_store(data_dir):
    assert database.get_search_history() == []
    assert database.get_favorites() == []
    assert database.get_follow_by_key("x") is None
    assert database.remove_favorite("x") is False


def test_favorites_are_unique_per_process(data_dir):
    database.add_favorite("proc-1", "tjsp", make_record("proc-1"))
    database.add_favorite("proc-1", "tjrj", make_record("proc-1"))
    database.add_favorite("proc-2", "tjsp", make_record("proc-2"))

    favorites = database.get_favorites()
    assert len(favorites) == 2
    assert database.get_favorite_by_key("proc-1").tribunal == "tjrj"

    assert database.remove_favorite("proc-1") is True
    assert database.get_favorite_by_key("proc-1") is None
    assert [f.processNumber for f in database.get_favorites()] == ["proc-2"]


def test_follows_are_stored_separately(data_dir):
    database.add_follow("proc-1", "tjsp", make_record("proc-1"))

    assert database.get_follow_by_key("proc-1").processData.numeroProcesso == "proc-1"
    assert database.get_favorite_by_key("proc-1") is None
    assert (data_dir / "follows.json").exists()
    assert database.remove_follow("proc-1") is True
    assert database.get_follows() == []


def test_history_file_is_capped(data_dir):
    for i in range(50):
        database.add_search_history(f"proc-{i}", "tjsp", make_record(f"proc-{i}"))

    stored = json.loads((data_dir / database.HISTORY_FILE).read_text(encoding="utf-8"))
    assert len(stored) == database.HISTORY_LIMIT
    assert stored[-1]["processNumber"] == "proc-49"


def test_history_many_is_one_capped_write(data_dir):
    database.add_search_history("older", "tjsp")
    items = [(f"proc-{i}", make_record(f"proc-{i}")) for i in range(25)]

    entries = database.add_search_history_many("tjrj", items)

    assert len(entries) == 25
    stored = json.loads((data_dir / database.HISTORY_FILE).read_text(encoding="utf-8"))
    assert [s["processNumber"] for s in stored] == [f"proc-{i}" for i in range(15, 25)]
    assert database.get_search_history()[0].processNumber == "proc-24"
    assert database.add_search_history_many("tjrj", []) == []
