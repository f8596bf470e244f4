from typing import Literal


QueryPhase = Literal['count', 'data']


class BuildingsError(Exception):
    """Base class for errors raised by the buildings query engine."""


class ValidationError(BuildingsError):
    """The request cannot be turned into a query; the caller has to fix its input."""

    def __init__(self, field: str, message: str):
        super().__init__(f'{field}: {message}')
        self.field = field
        self.message = message


class QueryError(BuildingsError):
    """The database failed while running one of the two queries of a page."""

    def __init__(self, phase: QueryPhase, message: str):
        super().__init__(f'{phase} query failed: {message}')
        self.phase = phase
        self.message = message
