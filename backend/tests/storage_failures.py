from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError


class DriverError(Exception):
    pass


def lost_connection():
    return OperationalError("SELECT 1", {}, DriverError(2013, "Lost connection to MySQL server during query"))


def pool_timeout():
    return PoolTimeoutError("QueuePool limit of size 5 overflow 10 reached, connection timed out, timeout 30.00")


class FailingSession:
    """Stands in for ``AsyncSession``; every statement raises ``error_factory()``."""

    def __init__(self, error_factory):
        self.error_factory = error_factory
        self.executed = 0
        self.rollback_calls = 0

    async def execute(self, *args, **kwargs):
        self.executed += 1
        raise self.error_factory()

    async def rollback(self):
        self.rollback_calls += 1

    async def close(self):
        pass
