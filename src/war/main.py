#!/usr/bin/env python3
import argparse
import json
import random
import sys

import colorama
from colorama import Fore, Style
from pydantic import ValidationError

from .config import load_config
from .combat import CombatEngine, format_attack_result
from .exceptions import WarError
from .logger import war_logger
from .world import World


def display_header(title: str):
    print(f"\n{Fore.YELLOW}{'=' * 20} {title} {'=' * 20}{Style.RESET_ALL}")


def display_world(world: World):
    for territory in world.graph:
        neighbors = ", ".join(n.name for n in territory.neighbors) or "-"
        print(f"  {territory.name}: owner {territory.owner}, {territory.armies} armies (neighbors: {neighbors})")
    for mission in world.missions:
        print(f"  Mission: {mission.description} (target {mission.target_owner})")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Replay the territory attack demo')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the dice (default: WAR_SEED or unseeded)')
    parser.add_argument('--player', type=int, default=1,
                        help='Acting player id (default: 1)')
    parser.add_argument('--attacker', default='Amazônia',
                        help='Attacking territory (default: Amazônia)')
    parser.add_argument('--defender', default='Sertão',
                        help='Defending territory (default: Sertão)')
    parser.add_argument('--rounds', type=positive_int, default=1,
                        help='Maximum number of combat rounds, stops early on conquest (default: 1)')
    parser.add_argument('--json', action='store_true',
                        help='Print the final state as JSON')
    return parser


def run(args: argparse.Namespace) -> int:
    config = load_config()
    war_logger.configure(config)

    seed = args.seed if args.seed is not None else config.seed
    engine = CombatEngine(rng=random.Random(seed))

    world = World.demo()
    try:
        display_header("Initial state")
        display_world(world)

        from_territory = world.graph.get_territory(args.attacker)
        to_territory = world.graph.get_territory(args.defender)

        print(f"\nAttack from {args.attacker} to {args.defender} by player {args.player}")
        for round_number in range(1, args.rounds + 1):
            reason = engine.attack_rejection_reason(from_territory, to_territory, args.player)
            if reason:
                # After at least one round the attacker simply ran out of armies.
                if round_number == 1:
                    war_logger.log_game_event('attack_rejected', reason)
                    print(f"{Fore.RED}Invalid attack: {reason}{Style.RESET_ALL}")
                break
            print(f"{Fore.GREEN}Round {round_number}: attack is valid, resolving combat...{Style.RESET_ALL}")
            result = engine.resolve_attack(from_territory, to_territory)
            print(format_attack_result(result))
            if result.territory_conquered:
                break

        display_header("Final state")
        if args.json:
            print(json.dumps(world.to_dict(), indent=2, ensure_ascii=False))
        else:
            display_world(world)
    finally:
        world.release()

    war_logger.display_stats()
    return 0


def main(argv=None) -> int:
    colorama.just_fix_windows_console()
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (WarError, ValidationError) as e:
        war_logger.log_error(str(e), context="war")
        return 1


if __name__ == "__main__":
    sys.exit(main())
