class WarError(Exception):
    """Base class for errors raised by the war core."""


class TerritoryError(WarError, ValueError):
    """Invalid territory input, or a link to a territory outside the graph."""


class MissionError(WarError, ValueError):
    """Invalid mission input."""


class AllocationError(WarError, MemoryError):
    """Ran out of resources while creating an entity or growing a neighbor list."""
