"""Errors raised while collecting statistics."""


class StatisticsQueryError(Exception):
    """An essential statistics query failed and no snapshot was produced."""

    def __init__(self, query: str, cause: Exception):
        """
        Args:
            query: Name of the failing query (collection name, "distribution"
                or "connection")
            cause: Underlying driver error
        """
        self.query = query
        self.cause = cause
        super().__init__(f"Statistics query '{query}' failed: {cause}")
