"""Database dialect families understood by the statistics collector."""

from enum import Enum


class Dialect(str, Enum):
    """Relational backend family resolved from a connection descriptor."""

    SQLITE = "sqlite"  # embedded, file-backed
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    UNSUPPORTED = "unsupported"

    @property
    def is_supported(self) -> bool:
        return self is not Dialect.UNSUPPORTED
