import logging
import weakref
from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass, field

from .exceptions import AllocationError, TerritoryError
from .logger import war_logger

NEUTRAL = 0


@dataclass(eq=False)
class Territory:
    name: str
    owner: int = NEUTRAL  # player id, 0 = neutral
    armies: int = 0
    _neighbor_refs: List[weakref.ref] = field(default_factory=list, repr=False)
    released: bool = field(default=False, repr=False)

    def __setattr__(self, key, value):
        if key == 'name' and 'name' in self.__dict__:
            raise AttributeError("Territory name cannot be changed")
        super().__setattr__(key, value)

    @property
    def neighbors(self) -> List['Territory']:
        """Live neighbors in insertion order (duplicates kept)."""
        neighbors = []
        for ref in self._neighbor_refs:
            territory = ref()
            if territory is not None:
                neighbors.append(territory)
        return neighbors

    def add_neighbor(self, neighbor: 'Territory') -> None:
        """Append ``neighbor`` to this territory's neighbor list (one direction only)."""
        try:
            self._neighbor_refs.append(weakref.ref(neighbor))
        except MemoryError as e:
            raise AllocationError(f"Cannot grow neighbor list of {self.name}") from e

    def is_adjacent_to(self, other: 'Territory') -> bool:
        """Check if ``other`` appears in this territory's neighbor list."""
        for ref in self._neighbor_refs:
            if ref() is other:
                return True
        return False

    def is_owned_by(self, player_id: int) -> bool:
        return self.owner == player_id

    def can_attack_from(self) -> bool:
        """At least one army has to stay behind."""
        return self.armies >= 2

    def release(self) -> None:
        """Drop the neighbor references. The neighbors themselves are untouched."""
        self._neighbor_refs.clear()
        self.released = True

    def to_dict(self) -> dict:
        """Convert territory to dictionary for display."""
        return {
            'name': self.name,
            'owner': self.owner,
            'armies': self.armies,
            'neighbors': [n.name for n in self.neighbors]
        }


def _check_int(value, label: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TerritoryError(f"{label} must be an integer, got {value!r}")
    if value < minimum:
        raise TerritoryError(f"{label} must be >= {minimum}, got {value}")


def create_territory(name: str, owner: int, armies: int) -> Territory:
    """
    Create a territory with an empty neighbor list.
    Raises TerritoryError on bad input and AllocationError when out of memory.
    """
    if not isinstance(name, str) or not name:
        raise TerritoryError("Territory name must be a non-empty string")
    _check_int(owner, "owner", NEUTRAL)
    _check_int(armies, "armies", 0)

    try:
        territory = Territory(name=name, owner=owner, armies=armies)
    except MemoryError as e:
        raise AllocationError(f"Cannot allocate territory {name}") from e

    war_logger.log_game_event('territory_created', f"{name} (owner {owner}, {armies} armies)")
    return territory


def add_neighbor(territory: Territory, neighbor: Territory) -> None:
    """Make ``neighbor`` adjacent to ``territory``. Call twice for a two-way edge."""
    if not isinstance(territory, Territory) or not isinstance(neighbor, Territory):
        raise TerritoryError("add_neighbor expects two territories")
    territory.add_neighbor(neighbor)
    war_logger.log_game_event('neighbor_added', f"{territory.name} -> {neighbor.name}", level=logging.DEBUG)


class TerritoryGraph:
    """Owns all territories and their neighbor links."""

    def __init__(self):
        self.territories: List[Territory] = []

    def __len__(self) -> int:
        return len(self.territories)

    def __iter__(self) -> Iterator[Territory]:
        return iter(self.territories)

    def __contains__(self, territory) -> bool:
        return any(t is territory for t in self.territories)

    def create_territory(self, name: str, owner: int = NEUTRAL, armies: int = 1) -> Territory:
        """Create a territory and take ownership of it."""
        territory = create_territory(name, owner, armies)
        try:
            self.territories.append(territory)
        except MemoryError as e:
            raise AllocationError("Cannot grow territory list") from e
        return territory

    def add_neighbor(self, territory: Territory, neighbor: Territory) -> None:
        """Directional link between two members of this graph."""
        for t in (territory, neighbor):
            if t not in self:
                name = getattr(t, 'name', t)
                raise TerritoryError(f"Territory {name!r} does not belong to this graph")
        add_neighbor(territory, neighbor)

    def link(self, first: Territory, second: Territory) -> None:
        """Link two territories in both directions."""
        self.add_neighbor(first, second)
        self.add_neighbor(second, first)

    def get_territory(self, name: str) -> Optional[Territory]:
        """Get a territory by name."""
        for territory in self.territories:
            if territory is not None and territory.name == name:
                return territory
        return None

    def get_all_territories(self) -> List[Territory]:
        return [t for t in self.territories if t is not None]

    def get_territories_by_owner(self, owner: int) -> List[Territory]:
        """Get all territories owned by a player."""
        return [t for t in self.territories if t is not None and t.owner == owner]

    def are_adjacent(self, territory1: str, territory2: str) -> bool:
        """Check if territory2 is listed as a neighbor of territory1 (directional)."""
        t1 = self.get_territory(territory1)
        t2 = self.get_territory(territory2)
        if t1 and t2:
            return t1.is_adjacent_to(t2)
        return False

    def to_dict(self) -> Dict[str, dict]:
        return {
            territory.name: territory.to_dict()
            for territory in self.get_all_territories()
        }
