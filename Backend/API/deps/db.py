from contextlib import contextmanager
from typing import Optional
import config
from services.verify import RoundRecord


def connect():
    import pyodbc  # needs the system ODBC driver manager, only load it on first connect
    return pyodbc.connect(config.DB_DSN, autocommit=False)


@contextmanager
def get_conn():
    conn = connect()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def exec_tsql(conn, sql: str, params: tuple = ()):
    cur = conn.cursor()
    cur.execute(sql, params)
    # statements without a result set leave description empty
    if cur.description is None:
        return []
    return cur.fetchall()


class SqlRoundStore:
    SCHEMA_SQL = """
IF OBJECT_ID(N'dbo.PlinkoRounds', N'U') IS NULL
CREATE TABLE dbo.PlinkoRounds (
  IdRonda     BIGINT IDENTITY(1,1) PRIMARY KEY,
  ServerCommit CHAR(64)      NOT NULL,
  ServerSeed  NVARCHAR(200)  NOT NULL,
  ClientSeed  NVARCHAR(400)  NOT NULL,
  Nonce       NVARCHAR(200)  NOT NULL,
  NumRows     INT            NOT NULL,
  StartSlot   INT            NOT NULL,
  ResultSlot  INT            NOT NULL,
  Ts          BIGINT         NOT NULL
);
"""

    INSERT_SQL = """
INSERT INTO dbo.PlinkoRounds (ServerCommit, ServerSeed, ClientSeed, Nonce, NumRows, StartSlot, ResultSlot, Ts)
OUTPUT INSERTED.IdRonda
VALUES (?, ?, ?, ?, ?, ?, ?, ?);
"""

    SELECT_SQL = """
SELECT IdRonda, ServerCommit, ServerSeed, ClientSeed, Nonce, NumRows, StartSlot, ResultSlot, Ts
FROM dbo.PlinkoRounds WHERE IdRonda = ?;
"""

    def init_schema(self):
        with get_conn() as conn:
            exec_tsql(conn, self.SCHEMA_SQL)

    def add(self, r: RoundRecord) -> int:
        params = (r.commit, r.server_seed, r.client_seed, r.nonce,
                  r.rows, r.start_slot, r.result_slot, r.timestamp)
        with get_conn() as conn:
            rows = exec_tsql(conn, self.INSERT_SQL, params)
        return int(rows[0][0])

    def get(self, round_id: int) -> Optional[RoundRecord]:
        with get_conn() as conn:
            rows = exec_tsql(conn, self.SELECT_SQL, (round_id,))
        if not rows:
            return None
        return RoundRecord.from_row(rows[0])


store = SqlRoundStore()


def get_store():
    return store
