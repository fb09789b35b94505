import sqlite3

from vocabquiz.storage import MemoryStorage, SQLiteStorage


def test_memory_storage_round_trip():
    storage = MemoryStorage()
    storage.save_blob("cvt_deck", {"order": [1, 0], "cursor": 1})
    assert storage.load_blob("cvt_deck") == {"order": [1, 0], "cursor": 1}
    assert storage.load_blob("missing") is None


def test_corrupt_blob_loads_as_none():
    storage = MemoryStorage({"cvt_deck": '{"order": [1, 0'})
    assert storage.load_blob("cvt_deck") is None


def test_sqlite_storage_persists_between_instances(tmp_path):
    db_path = str(tmp_path / "db" / "quiz.db")
    SQLiteStorage(db_path).save_blob("cvt_prefs", {"show_hint": False, "theme": "dark"})
    storage = SQLiteStorage(db_path)
    assert storage.load_blob("cvt_prefs") == {"show_hint": False, "theme": "dark"}

    storage.save_blob("cvt_prefs", {"show_hint": True, "theme": "light"})
    assert storage.load_blob("cvt_prefs")["theme"] == "light"
    assert storage.load_blob("cvt_stats") is None


def test_sqlite_storage_tolerates_corrupt_rows(tmp_path):
    db_path = str(tmp_path / "quiz.db")
    storage = SQLiteStorage(db_path)
    conn = sqlite3.connect(db_path)
    with conn:
        conn.execute("INSERT INTO kv_store (key, value) VALUES (?, ?)", ("cvt_deck", "{oops"))
    conn.close()
    assert storage.load_blob("cvt_deck") is None


def test_sqlite_storage_keeps_unicode(tmp_path):
    storage = SQLiteStorage(str(tmp_path / "quiz.db"))
    storage.save_blob("note", {"term": "谢谢", "phonetic": "xièxiè"})
    assert storage.load_blob("note") == {"term": "谢谢", "phonetic": "xièxiè"}


class FailingConnection:
    def __init__(self):
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, *args):
        raise sqlite3.OperationalError("database is locked")

    def close(self):
        self.closed = True


def test_sqlite_write_failure_closes_connection(tmp_path, monkeypatch):
    storage = SQLiteStorage(str(tmp_path / "quiz.db"))
    conn = FailingConnection()
    monkeypatch.setattr("vocabquiz.storage.get_db_connection", lambda db_path=None: conn)

    storage.save_blob("cvt_deck", {"order": [0], "cursor": 1})
    assert conn.closed
