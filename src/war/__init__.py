from .exceptions import WarError, TerritoryError, MissionError, AllocationError
from .territory import Territory, TerritoryGraph, create_territory, add_neighbor
from .mission import Mission, MissionBook, create_mission
from .combat import (
    AttackResult,
    CombatEngine,
    validate_attack,
    resolve_attack,
    attack_rejection_reason,
    format_attack_result,
)
from .world import World, release_all

__version__ = "0.1.0"

__all__ = [
    "WarError",
    "TerritoryError",
    "MissionError",
    "AllocationError",
    "Territory",
    "TerritoryGraph",
    "create_territory",
    "add_neighbor",
    "Mission",
    "MissionBook",
    "create_mission",
    "AttackResult",
    "CombatEngine",
    "validate_attack",
    "resolve_attack",
    "attack_rejection_reason",
    "format_attack_result",
    "World",
    "release_all",
]
