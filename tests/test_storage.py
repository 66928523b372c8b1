import json

from src.snake.storage import HighScoreStore


def test_missing_file_reads_zero(tmp_path):
    assert HighScoreStore(tmp_path / "nope.json").load() == 0


def test_save_then_load(store):
    store.save(120)
    assert store.load() == 120
    assert json.loads(store.path.read_text()) == {"high_score": 120}


def test_malformed_file_reads_zero(tmp_path):
    path = tmp_path / "best.json"
    for payload in ("{not json", '{"high_score": -5}', '{"high_score": "90"}', "[1, 2]", '{"high_score": true}'):
        path.write_text(payload)
        assert HighScoreStore(path).load() == 0


def test_unwritable_path_degrades_to_memory(tmp_path, caplog):
    # a directory cannot be written as a file
    store = HighScoreStore(tmp_path)
    store.save(40)
    assert "Could not save high score" in caplog.text


def test_memory_only_store():
    store = HighScoreStore()
    assert store.load() == 0
    store.save(70)
    assert store.load() == 70


def test_engine_reads_high_score_once(make_engine, store):
    store.save(90)
    engine = make_engine(store=store)
    store.save(10)
    assert engine.high_score == 90


def test_unreadable_file_reads_zero(store, monkeypatch, caplog):
    store.save(60)

    def denied(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(type(store.path), "read_text", denied)
    assert store.load() == 0
    assert "Could not read high score" in caplog.text


def test_engine_survives_unreadable_store(make_engine, store, monkeypatch):
    def denied(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(type(store.path), "read_text", denied)
    engine = make_engine(store=store)
    assert engine.high_score == 0
