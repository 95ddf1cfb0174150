from datetime import datetime

import pytest

from src.gym_attendance.gym_attendance.attendance.mysql_attendance_repository import MySQLVisitRepository


class ScriptedCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = 41

    def execute(self, sql, params=None):
        self._conn.statements.append(" ".join(sql.split()))
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise RuntimeError("lock wait timeout")

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.statements = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return ScriptedCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class ScriptedFactory:
    def __init__(self, fail_on=None):
        self.connections = []
        self._fail_on = fail_on

    def connect(self):
        conn = ScriptedConnection(self._fail_on)
        self.connections.append(conn)
        return conn


def test_record_visit_inserts_and_counts_in_one_transaction():
    factory = ScriptedFactory()

    visit_id = MySQLVisitRepository(factory).record_visit(member_id=1, timestamp=datetime(2025, 6, 15, 7), qr_code_id=3)

    assert visit_id == 41
    assert len(factory.connections) == 1
    conn = factory.connections[0]
    assert [s.split()[0] for s in conn.statements] == ["INSERT", "UPDATE"]
    assert conn.committed and conn.closed


def test_record_visit_rolls_back_when_counter_update_fails():
    factory = ScriptedFactory(fail_on="total_lifetime_visits")

    with pytest.raises(RuntimeError):
        MySQLVisitRepository(factory).record_visit(member_id=1, timestamp=datetime(2025, 6, 15, 7), qr_code_id=None)

    conn = factory.connections[0]
    assert conn.rolled_back
    assert not conn.committed
