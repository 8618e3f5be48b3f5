import random
from typing import Optional
from dataclasses import dataclass

from .territory import Territory
from .logger import war_logger

DIE_FACES = 6


@dataclass
class AttackResult:
    attacker: str
    defender: str
    attack_roll: int
    defend_roll: int
    attacker_losses: int
    defender_losses: int
    attacker_armies: int
    defender_armies: int
    defender_owner: int
    territory_conquered: bool = False
    armies_moved: int = 0

    def to_dict(self) -> dict:
        """Convert attack result to dictionary."""
        return {
            'attacker': self.attacker,
            'defender': self.defender,
            'attack_roll': self.attack_roll,
            'defend_roll': self.defend_roll,
            'attacker_losses': self.attacker_losses,
            'defender_losses': self.defender_losses,
            'attacker_armies': self.attacker_armies,
            'defender_armies': self.defender_armies,
            'defender_owner': self.defender_owner,
            'territory_conquered': self.territory_conquered,
            'armies_moved': self.armies_moved
        }


class CombatEngine:
    """
    Validates and resolves single-round attacks between territories.

    ``rng`` is anything with a ``randint(a, b)`` method; pass a seeded
    ``random.Random`` (or a scripted stand-in) for reproducible battles.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()

    def roll_die(self) -> int:
        return self.rng.randint(1, DIE_FACES)

    @staticmethod
    def attack_rejection_reason(from_territory: Optional[Territory], to_territory: Optional[Territory],
                                player_id: int) -> Optional[str]:
        """
        Return why an attack is not allowed, or None if it is.
        Rules are checked in a fixed order and the first failure wins.
        """
        if from_territory is None or to_territory is None:
            return "Invalid territory"

        if not from_territory.is_owned_by(player_id):
            return "You don't own the attacking territory"

        if to_territory.is_owned_by(player_id):
            return "Cannot attack your own territory"

        if not from_territory.can_attack_from():
            return "Need at least 2 armies to attack"

        if not from_territory.is_adjacent_to(to_territory):
            return "Territories are not adjacent"

        return None

    @classmethod
    def validate_attack(cls, from_territory: Optional[Territory], to_territory: Optional[Territory],
                        player_id: int) -> bool:
        return cls.attack_rejection_reason(from_territory, to_territory, player_id) is None

    def resolve_attack(self, from_territory: Territory, to_territory: Territory) -> AttackResult:
        """
        Fight one round between two territories and apply the outcome in place.

        The pair must already have passed validate_attack; nothing is checked
        again here. Ties go to the defender. If the defender wins, the attacker
        loses one army with no lower bound.
        """
        attack_roll = self.roll_die()
        defend_roll = self.roll_die()

        attacker_losses = 0
        defender_losses = 0
        conquered = False
        moved = 0

        if attack_roll > defend_roll:
            to_territory.armies -= 1
            defender_losses = 1
            if to_territory.armies <= 0:
                to_territory.owner = from_territory.owner
                from_territory.armies -= 1
                to_territory.armies = 1
                conquered = True
                moved = 1
        else:
            from_territory.armies -= 1
            attacker_losses = 1

        result = AttackResult(
            attacker=from_territory.name,
            defender=to_territory.name,
            attack_roll=attack_roll,
            defend_roll=defend_roll,
            attacker_losses=attacker_losses,
            defender_losses=defender_losses,
            attacker_armies=from_territory.armies,
            defender_armies=to_territory.armies,
            defender_owner=to_territory.owner,
            territory_conquered=conquered,
            armies_moved=moved
        )
        war_logger.log_combat_result(result)
        return result


# Shares the process-wide random stream; callers seed it if they need repeatability.
_default_engine = CombatEngine(rng=random)


def attack_rejection_reason(from_territory: Optional[Territory], to_territory: Optional[Territory],
                            player_id: int) -> Optional[str]:
    return CombatEngine.attack_rejection_reason(from_territory, to_territory, player_id)


def validate_attack(from_territory: Optional[Territory], to_territory: Optional[Territory],
                    player_id: int) -> bool:
    """True iff ``player_id`` may attack ``to_territory`` from ``from_territory``."""
    return CombatEngine.validate_attack(from_territory, to_territory, player_id)


def resolve_attack(from_territory: Territory, to_territory: Territory, dice=None) -> AttackResult:
    """Resolve one combat round. ``dice`` overrides the random source for this call."""
    engine = CombatEngine(rng=dice) if dice is not None else _default_engine
    return engine.resolve_attack(from_territory, to_territory)


def format_attack_result(result: AttackResult) -> str:
    """Format an attack result into a readable string."""
    message = f"Battle: {result.attacker} attacks {result.defender}\n"
    message += f"Attacker rolled: {result.attack_roll} | Defender rolled: {result.defend_roll}\n"

    if result.territory_conquered:
        message += (f"{result.defender} has been conquered by player {result.defender_owner}! "
                    f"{result.attacker} keeps {result.attacker_armies}, "
                    f"{result.defender} holds {result.defender_armies}")
    elif result.defender_losses:
        message += f"{result.defender} loses 1 army ({result.defender_armies} left)"
    else:
        message += f"{result.attacker} loses 1 army ({result.attacker_armies} left)"

    return message
