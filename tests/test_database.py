"""
Tests for the statement timeout guard around catalog queries.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from app.core import database
from app.core.database import QUERY_CANCELED_PGCODE, statement_timeout
from app.core.exceptions import QueryTimeoutError


class DriverError(Exception):

    def __init__(self, pgcode):
        super().__init__("driver error")
        self.pgcode = pgcode


def operational_error(pgcode):
    return OperationalError("SELECT 1", {}, DriverError(pgcode))


@pytest.fixture
def pg_session(monkeypatch):
    monkeypatch.setattr(database, "is_postgres", lambda db: True)
    return MagicMock()


class TestStatementTimeout:

    def test_sets_local_timeout_on_postgres(self, pg_session):
        with statement_timeout(pg_session, 5000):
            pass

        statement = pg_session.execute.call_args[0][0]
        assert str(statement) == "SET LOCAL statement_timeout = 5000"

    def test_cancelled_statement_becomes_query_timeout(self, pg_session):
        with pytest.raises(QueryTimeoutError) as exc:
            with statement_timeout(pg_session, 5000):
                raise operational_error(QUERY_CANCELED_PGCODE)

        assert exc.value.key == "common.queryTimeout"
        assert exc.value.status_code == 503
        pg_session.rollback.assert_called_once()

    def test_other_driver_errors_propagate(self, pg_session):
        with pytest.raises(OperationalError):
            with statement_timeout(pg_session, 5000):
                raise operational_error("08006")

        pg_session.rollback.assert_not_called()

    def test_other_dialects_run_unchanged(self, db):
        with statement_timeout(db, 5000):
            result = db.execute(text("SELECT 1")).scalar()

        assert result == 1
