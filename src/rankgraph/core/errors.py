"""Error kinds raised by the graph, the id allocator and the rank engine.

All errors derive from RankGraphError so callers can catch the whole family.
ExhaustedError is not a ValueError, so callers can catch running out of ids
apart from argument errors.
"""


class RankGraphError(Exception):
    """Base class for all rankgraph errors."""

    pass


class InvalidIdError(RankGraphError, LookupError):
    """Raised when an operation references an id that is not currently live."""

    def __init__(self, arg_name: str, entity_id: int):
        super().__init__(f"Illegal argument '{arg_name}': invalid ID {entity_id}.")
        self.arg_name = arg_name
        self.entity_id = entity_id


class InvalidArgumentError(RankGraphError, ValueError):
    """Raised for out-of-range alpha, threshold, weight or id."""

    pass


class DoubleReturnError(InvalidArgumentError):
    """Raised when an id that is not currently borrowed is returned to the allocator."""

    pass


class ExhaustedError(RankGraphError):
    """Raised when the allocator has no ids left to hand out."""

    pass
