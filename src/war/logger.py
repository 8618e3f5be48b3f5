# -*- coding: utf-8 -*-
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from colorama import Fore, Back, Style

from .config import WarConfig


class ColoredConsoleHandler(logging.StreamHandler):
    """Stream handler that paints each record with its event color (or its level color)."""

    LEVEL_COLORS = {
        'DEBUG': Style.DIM,
        'INFO': Fore.CYAN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Back.WHITE,
    }

    def __init__(self, stream=None, use_colors: bool = True):
        super().__init__(stream if stream is not None else sys.stderr)
        self.use_colors = use_colors
        # Without an explicit stream, write to whatever sys.stderr is at emit time.
        self._follow_stderr = stream is None

    def emit(self, record: logging.LogRecord) -> None:
        if self._follow_stderr:
            self.stream = sys.stderr
        super().emit(record)

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if not self.use_colors:
            return msg
        color = getattr(record, 'color', None) or self.LEVEL_COLORS.get(record.levelname, '')
        return f"{color}{msg}{Style.RESET_ALL}"


class WarLogger:
    """Event logger for the war core with colored console output and battle statistics."""

    EVENT_COLORS = {
        'territory_created': Fore.GREEN,
        'mission_created': Fore.BLUE,
        'neighbor_added': Style.DIM,
        'attack_rejected': Fore.YELLOW,
        'battle': Fore.LIGHTRED_EX,
        'territory_conquered': Fore.LIGHTYELLOW_EX,
        'released': Fore.MAGENTA,
    }

    def __init__(self, config: Optional[WarConfig] = None):
        self.game_stats = {
            'territories_created': 0,
            'missions_created': 0,
            'battles_fought': 0,
            'territories_conquered': 0,
        }
        self.logger = logging.getLogger('war')
        self.logger.setLevel(logging.DEBUG)
        self._handlers = []
        self.configure(config or WarConfig())

    def configure(self, config: WarConfig) -> None:
        """(Re)install the console and file handlers according to ``config``."""
        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S')

        console_handler = ColoredConsoleHandler(use_colors=config.use_colors)
        console_handler.setLevel(getattr(logging, config.log_level))
        console_handler.setFormatter(formatter)
        self._add_handler(console_handler)

        if config.log_file:
            try:
                file_handler = logging.FileHandler(config.log_file, encoding='utf-8')
            except OSError as e:
                self.log_warning(f"Cannot open log file {config.log_file}: {e}")
            else:
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(formatter)
                self._add_handler(file_handler)

    def _add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)
        self._handlers.append(handler)

    def log_game_event(self, event_type: str, message: str, level: int = logging.INFO):
        """Log a significant game event, colored by its type."""
        color = self.EVENT_COLORS.get(event_type)
        self.logger.log(level, f"{event_type.upper()}: {message}",
                        extra={'color': color, 'event_type': event_type})

        if event_type == 'territory_created':
            self.game_stats['territories_created'] += 1
        elif event_type == 'mission_created':
            self.game_stats['missions_created'] += 1

    def log_combat_result(self, result: Any):
        """Log the rolls and outcome of a single combat round."""
        self.game_stats['battles_fought'] += 1
        self.log_game_event(
            'battle',
            f"{result.attacker} -> {result.defender}: "
            f"attacker rolled {result.attack_roll}, defender rolled {result.defend_roll}"
        )

        if result.territory_conquered:
            self.game_stats['territories_conquered'] += 1
            self.log_game_event('territory_conquered', f"{result.defender} conquered by player {result.defender_owner}")
        elif result.defender_losses:
            self.log_game_event('battle', f"{result.defender} loses 1 army ({result.defender_armies} left)")
        else:
            self.log_game_event('battle', f"{result.attacker} loses 1 army ({result.attacker_armies} left)")

    def log_error(self, error: str, context: str = ""):
        context_str = f" ({context})" if context else ""
        self.logger.error(f"ERROR{context_str}: {error}")

    def log_info(self, message: str):
        self.logger.info(message)

    def log_warning(self, message: str):
        self.logger.warning(message)

    def get_stats(self) -> Dict[str, int]:
        return dict(self.game_stats)

    def reset_stats(self) -> None:
        for key in self.game_stats:
            self.game_stats[key] = 0

    def display_stats(self):
        """Log a summary of everything recorded so far."""
        stamp = datetime.now().strftime('%H:%M:%S')
        self.log_info(
            f"Stats at {stamp}: "
            f"{self.game_stats['territories_created']} territories, "
            f"{self.game_stats['missions_created']} missions, "
            f"{self.game_stats['battles_fought']} battles, "
            f"{self.game_stats['territories_conquered']} conquests"
        )


# Global logger instance
war_logger = WarLogger()
