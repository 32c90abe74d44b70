from datetime import date

import pytest
from flask import Flask


@pytest.fixture
def fixed_today() -> date:
    # A Wednesday; its week starts on Sunday 2024-05-05
    return date(2024, 5, 8)


class ScriptedCursor:
    """Dict cursor answering SELECTs by statement prefix.

    Like mysql-connector without FOUND_ROWS, every UPDATE reports zero
    changed rows.
    """

    def __init__(self, rows_by_prefix, fail_on=None):
        self._rows_by_prefix = rows_by_prefix
        self._fail_on = fail_on
        self._last = None
        self.executed = []
        self.rowcount = 0
        self.lastrowid = 41

    def execute(self, sql, params=()):
        stmt = " ".join(sql.split())
        if self._fail_on and stmt.startswith(self._fail_on):
            raise RuntimeError("connection lost")
        self.executed.append((stmt, params))
        self._last = next((row for prefix, row in self._rows_by_prefix.items() if stmt.startswith(prefix)), None)
        self.rowcount = 0

    def fetchone(self):
        return self._last

    def fetchall(self):
        return [self._last] if self._last else []

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        pass


class ScriptedConnectionFactory:
    def __init__(self, rows_by_prefix=None, fail_on=None):
        self.cursor = ScriptedCursor(rows_by_prefix or {}, fail_on=fail_on)
        self.connections = []

    def connect(self, *, with_database=True):
        conn = ScriptedConnection(self.cursor)
        self.connections.append(conn)
        return conn

    def statements(self):
        return [stmt for stmt, _ in self.cursor.executed]


@pytest.fixture
def scripted_db():
    return ScriptedConnectionFactory


@pytest.fixture
def make_client():
    """Flask test client with the given controllers registered on a container stand-in."""

    def _make(container, *registers):
        app = Flask(__name__)
        app.secret_key = "test-secret"
        app.config["TESTING"] = True
        for register in registers:
            register(app, container)
        return app.test_client()

    return _make


def login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


@pytest.fixture
def login_as():
    return login
