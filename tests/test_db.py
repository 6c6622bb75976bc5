from contextlib import contextmanager
import pytest

from deps import db
from services.verify import RoundRecord


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.description = None

    def execute(self, sql, params=()):
        self.conn.executed.append((sql, params))
        self.description = [("col",)] if self.conn.result is not None else None

    def fetchall(self):
        return self.conn.result


class FakeConn:
    def __init__(self, result=None):
        self.result = result
        self.executed = []

    def cursor(self):
        return FakeCursor(self)


@pytest.fixture
def conn(monkeypatch):
    fake = FakeConn()

    @contextmanager
    def get_conn():
        yield fake

    monkeypatch.setattr(db, "get_conn", get_conn)
    return fake


def test_exec_tsql_without_result_set():
    assert db.exec_tsql(FakeConn(), "UPDATE x SET y = 1") == []


def test_exec_tsql_returns_rows():
    assert db.exec_tsql(FakeConn([(1,)]), "SELECT 1") == [(1,)]


def test_store_add_passes_record_fields(conn):
    conn.result = [(7,)]
    record = RoundRecord(commit="c" * 64, server_seed="abc", client_seed="xyz", nonce="1",
                         rows=4, start_slot=2, result_slot=4, timestamp=123)
    assert db.SqlRoundStore().add(record) == 7
    sql, params = conn.executed[0]
    assert "OUTPUT INSERTED.IdRonda" in sql
    assert params == ("c" * 64, "abc", "xyz", "1", 4, 2, 4, 123)


def test_store_get(conn):
    conn.result = [(3, "c" * 64, "abc", "xyz", "1", 4, 2, 4, 123)]
    record = db.SqlRoundStore().get(3)
    assert record.round_id == 3
    assert record.result_slot == 4
    assert conn.executed[0][1] == (3,)


def test_store_get_missing(conn):
    conn.result = []
    assert db.SqlRoundStore().get(3) is None


class RecordingConn(FakeConn):
    def __init__(self):
        super().__init__()
        self.calls = []

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")

    def close(self):
        self.calls.append("close")


@pytest.fixture
def raw_conn(monkeypatch):
    fake = RecordingConn()
    monkeypatch.setattr(db, "connect", lambda: fake)
    return fake


def test_get_conn_commits_and_closes(raw_conn):
    with db.get_conn() as conn:
        assert conn is raw_conn
    assert raw_conn.calls == ["commit", "close"]


def test_get_conn_rolls_back_and_reraises(raw_conn):
    with pytest.raises(RuntimeError, match="insert failed"):
        with db.get_conn():
            raise RuntimeError("insert failed")
    assert raw_conn.calls == ["rollback", "close"]


def test_store_add_error_rolls_back(raw_conn, monkeypatch):
    def boom(conn, sql, params=()):
        raise RuntimeError("duplicate key")

    monkeypatch.setattr(db, "exec_tsql", boom)
    record = RoundRecord(commit="c" * 64, server_seed="abc", client_seed="xyz", nonce="1",
                         rows=4, start_slot=2, result_slot=4)
    with pytest.raises(RuntimeError):
        db.SqlRoundStore().add(record)
    assert raw_conn.calls == ["rollback", "close"]
