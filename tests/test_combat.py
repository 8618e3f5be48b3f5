import logging
import random

import pytest

from war.combat import (
    CombatEngine,
    attack_rejection_reason,
    format_attack_result,
    resolve_attack,
    validate_attack,
)
from war.logger import war_logger
from war.territory import TerritoryGraph


@pytest.fixture
def board():
    graph = TerritoryGraph()
    amazonia = graph.create_territory("Amazônia", 1, 5)
    sertao = graph.create_territory("Sertão", 2, 3)
    litoral = graph.create_territory("Litoral", 0, 2)
    graph.link(amazonia, sertao)
    graph.link(sertao, litoral)
    return amazonia, sertao, litoral


def snapshot(territory):
    return territory.owner, territory.armies, territory.neighbors


class TestValidateAttack:

    def test_valid_attack(self, board):
        amazonia, sertao, _ = board
        assert validate_attack(amazonia, sertao, 1)
        assert attack_rejection_reason(amazonia, sertao, 1) is None

    def test_missing_territory(self, board):
        amazonia, sertao, _ = board
        assert not validate_attack(None, sertao, 1)
        assert not validate_attack(amazonia, None, 1)
        assert attack_rejection_reason(None, None, 1) == "Invalid territory"

    def test_player_must_own_attacker(self, board):
        amazonia, sertao, _ = board
        assert not validate_attack(amazonia, sertao, 3)
        assert attack_rejection_reason(amazonia, sertao, 3) == "You don't own the attacking territory"

    def test_cannot_attack_own_territory(self, board):
        amazonia, sertao, _ = board
        sertao.owner = 1
        assert not validate_attack(amazonia, sertao, 1)
        assert attack_rejection_reason(amazonia, sertao, 1) == "Cannot attack your own territory"

    def test_attacker_needs_two_armies(self, board):
        amazonia, sertao, _ = board
        amazonia.armies = 1
        assert not validate_attack(amazonia, sertao, 1)
        assert attack_rejection_reason(amazonia, sertao, 1) == "Need at least 2 armies to attack"

    def test_single_army_never_attacks(self, board):
        amazonia, sertao, litoral = board
        sertao.armies = 1
        for target in (amazonia, litoral):
            assert not validate_attack(sertao, target, 2)

    def test_target_must_be_neighbor(self, board):
        amazonia, _, litoral = board
        assert not validate_attack(amazonia, litoral, 1)
        assert attack_rejection_reason(amazonia, litoral, 1) == "Territories are not adjacent"

    def test_adjacency_is_checked_from_the_attacker_side(self):
        graph = TerritoryGraph()
        north = graph.create_territory("Norte", 1, 4)
        south = graph.create_territory("Sul", 2, 4)
        graph.add_neighbor(south, north)

        assert not validate_attack(north, south, 1)
        assert validate_attack(south, north, 2)

    def test_rules_are_checked_in_order(self, board):
        amazonia, _, litoral = board
        amazonia.armies = 1
        # Fails both the army rule and the adjacency rule; the army rule comes first.
        assert attack_rejection_reason(amazonia, litoral, 1) == "Need at least 2 armies to attack"

    def test_duplicate_neighbors_still_validate(self, board):
        amazonia, sertao, _ = board
        amazonia.add_neighbor(sertao)
        assert validate_attack(amazonia, sertao, 1)

    def test_validation_does_not_mutate(self, board):
        amazonia, sertao, _ = board
        before = (snapshot(amazonia), snapshot(sertao))
        validate_attack(amazonia, sertao, 1)
        assert (snapshot(amazonia), snapshot(sertao)) == before


class TestResolveAttack:

    def test_attacker_wins_defender_survives(self, board, dice):
        amazonia, sertao, _ = board
        rolls = dice(6, 1)
        result = resolve_attack(amazonia, sertao, dice=rolls)

        assert rolls.calls == [(1, 6), (1, 6)]
        assert (result.attack_roll, result.defend_roll) == (6, 1)
        assert sertao.armies == 2
        assert sertao.owner == 2
        assert amazonia.armies == 5
        assert not result.territory_conquered
        assert result.defender_losses == 1
        assert result.attacker_losses == 0

    def test_conquest(self, board, dice):
        amazonia, sertao, _ = board
        sertao.armies = 1
        result = CombatEngine(rng=dice(6, 1)).resolve_attack(amazonia, sertao)

        assert result.territory_conquered
        assert sertao.owner == 1
        assert sertao.armies == 1
        assert amazonia.armies == 4
        assert result.armies_moved == 1
        assert result.defender_owner == 1

    def test_conquest_overwrites_negative_armies(self, board, dice):
        amazonia, sertao, _ = board
        sertao.armies = 0
        resolve_attack(amazonia, sertao, dice=dice(3, 2))
        assert sertao.armies == 1
        assert sertao.owner == 1

    def test_tie_goes_to_defender(self, board, dice):
        amazonia, sertao, _ = board
        before = snapshot(sertao)
        result = resolve_attack(amazonia, sertao, dice=dice(4, 4))

        assert amazonia.armies == 4
        assert snapshot(sertao) == before
        assert result.attacker_losses == 1
        assert not result.territory_conquered

    def test_defender_wins(self, board, dice):
        amazonia, sertao, _ = board
        before = snapshot(sertao)
        resolve_attack(amazonia, sertao, dice=dice(1, 6))

        assert amazonia.armies == 4
        assert snapshot(sertao) == before

    def test_defender_win_has_no_army_floor(self, board, dice):
        amazonia, sertao, _ = board
        amazonia.armies = 0
        resolve_attack(amazonia, sertao, dice=dice(2, 5))
        assert amazonia.armies == -1

    @pytest.mark.parametrize("seed", range(20))
    def test_invariants_hold_for_random_rolls(self, board, seed):
        amazonia, sertao, _ = board
        sertao.armies = 1 + seed % 3
        engine = CombatEngine(rng=random.Random(seed))
        attacker_before = amazonia.armies
        defender_before = sertao.armies

        result = engine.resolve_attack(amazonia, sertao)

        assert 1 <= result.attack_roll <= 6
        assert 1 <= result.defend_roll <= 6
        if sertao.owner != 2:
            assert sertao.armies == 1
            assert amazonia.armies == attacker_before - 1
        elif result.attack_roll > result.defend_roll:
            assert sertao.armies == defender_before - 1
            assert amazonia.armies == attacker_before
        else:
            assert amazonia.armies == attacker_before - 1
            assert sertao.armies == defender_before

    def test_seeded_engines_agree(self, board):
        first = CombatEngine(rng=random.Random(7))
        second = CombatEngine(rng=random.Random(7))
        assert [first.roll_die() for _ in range(10)] == [second.roll_die() for _ in range(10)]

    def test_combat_is_logged(self, board, dice, caplog):
        amazonia, sertao, _ = board
        sertao.armies = 1
        with caplog.at_level(logging.INFO, logger='war'):
            resolve_attack(amazonia, sertao, dice=dice(5, 2))

        assert "attacker rolled 5, defender rolled 2" in caplog.text
        assert "Sertão conquered by player 1" in caplog.text
        assert war_logger.get_stats()['battles_fought'] == 1
        assert war_logger.get_stats()['territories_conquered'] == 1

    def test_to_dict_and_format(self, board, dice):
        amazonia, sertao, _ = board
        result = resolve_attack(amazonia, sertao, dice=dice(6, 1))

        data = result.to_dict()
        assert data['attack_roll'] == 6
        assert data['defender_armies'] == 2

        text = format_attack_result(result)
        assert "Attacker rolled: 6 | Defender rolled: 1" in text
        assert "Sertão loses 1 army (2 left)" in text
