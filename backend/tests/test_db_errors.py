import pytest
from sqlalchemy.exc import OperationalError

from dzhehuti.core.db_errors import extract_error_code, raise_infrastructure_error
from dzhehuti.core.errors import InfrastructureError


class DriverError(Exception):
    def __init__(self, *args, sqlstate=None):
        super().__init__(*args)
        self.sqlstate = sqlstate


def test_extract_error_code_reads_driver_args():
    exc = OperationalError("stmt", {}, DriverError(2006, "MySQL server has gone away", sqlstate="HY000"))

    assert extract_error_code(exc) == (2006, "HY000")


def test_extract_error_code_tolerates_non_numeric_args():
    exc = OperationalError("stmt", {}, DriverError("connection refused"))

    assert extract_error_code(exc) == (None, None)


def test_infrastructure_error_keeps_cause_and_code():
    exc = OperationalError("stmt", {}, DriverError(2013, "Lost connection"))

    with pytest.raises(InfrastructureError) as ctx:
        raise_infrastructure_error(exc)

    assert ctx.value.status_code == 503
    assert ctx.value.detail.endswith("(code 2013)")
    assert ctx.value.__cause__ is exc
