from typing import List, Optional, Union

from .territory import Territory, TerritoryGraph
from .mission import Mission, MissionBook
from .logger import war_logger

TerritoryCollection = Union[TerritoryGraph, List[Optional[Territory]]]
MissionCollection = Union[MissionBook, List[Optional[Mission]]]


def _release_entries(entries: list) -> int:
    released = 0
    for i, entry in enumerate(entries):
        if entry is None:
            continue
        entry.release()
        entries[i] = None
        released += 1
    entries.clear()
    return released


def release_all(territories: Optional[TerritoryCollection], missions: Optional[MissionCollection]) -> None:
    """
    Release every territory and mission in the given collections, then empty them.

    Each territory is released once through its own slot; neighbor lists only
    lose their references. Either collection may be None, entries may be None,
    and calling this again on the emptied collections does nothing.

    Collections are emptied in place, so plain ones must be mutable lists;
    a tuple raises TypeError.
    """
    if isinstance(territories, TerritoryGraph):
        territories = territories.territories
    if isinstance(missions, MissionBook):
        missions = missions.missions

    released_territories = _release_entries(territories) if territories is not None else 0
    released_missions = _release_entries(missions) if missions is not None else 0

    if released_territories or released_missions:
        war_logger.log_game_event(
            'released', f"{released_territories} territories, {released_missions} missions"
        )


class World:
    """A territory graph together with the missions played on it."""

    def __init__(self):
        self.graph = TerritoryGraph()
        self.missions = MissionBook()

    def release(self) -> None:
        release_all(self.graph, self.missions)

    def to_dict(self) -> dict:
        return {
            'territories': self.graph.to_dict(),
            'missions': self.missions.to_dict()
        }

    @classmethod
    def demo(cls) -> 'World':
        """Three territories in a line (Amazônia - Sertão - Litoral) and two missions."""
        world = cls()
        amazonia = world.graph.create_territory("Amazônia", 1, 5)
        sertao = world.graph.create_territory("Sertão", 2, 3)
        litoral = world.graph.create_territory("Litoral", 0, 2)

        world.graph.link(amazonia, sertao)
        world.graph.link(sertao, litoral)

        world.missions.create_mission("Conquistar 3 territórios da região Norte", 0)
        world.missions.create_mission("Eliminar jogador 2", 2)
        return world
