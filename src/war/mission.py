from typing import Iterator, List
from dataclasses import dataclass, field

from .exceptions import AllocationError, MissionError
from .logger import war_logger


@dataclass(eq=False)
class Mission:
    description: str
    target_owner: int  # player id, not checked against any player list
    released: bool = field(default=False, repr=False)

    def release(self) -> None:
        self.released = True

    def to_dict(self) -> dict:
        return {
            'description': self.description,
            'target_owner': self.target_owner
        }


def create_mission(description: str, target_owner: int) -> Mission:
    """Create a mission. Raises MissionError on bad input and AllocationError when out of memory."""
    if not isinstance(description, str):
        raise MissionError("Mission description must be a string")
    if isinstance(target_owner, bool) or not isinstance(target_owner, int):
        raise MissionError(f"target_owner must be an integer, got {target_owner!r}")

    try:
        mission = Mission(description=description, target_owner=target_owner)
    except MemoryError as e:
        raise AllocationError("Cannot allocate mission") from e

    war_logger.log_game_event('mission_created', f"{description} (target {target_owner})")
    return mission


class MissionBook:
    """Owns the strategic missions of a game."""

    def __init__(self):
        self.missions: List[Mission] = []

    def __len__(self) -> int:
        return len(self.missions)

    def __iter__(self) -> Iterator[Mission]:
        return iter(self.missions)

    def create_mission(self, description: str, target_owner: int) -> Mission:
        mission = create_mission(description, target_owner)
        try:
            self.missions.append(mission)
        except MemoryError as e:
            raise AllocationError("Cannot grow mission list") from e
        return mission

    def get_missions_for(self, target_owner: int) -> List[Mission]:
        return [m for m in self.missions if m is not None and m.target_owner == target_owner]

    def to_dict(self) -> List[dict]:
        return [m.to_dict() for m in self.missions if m is not None]
