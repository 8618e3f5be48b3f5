import pytest

from war.logger import war_logger


class ScriptedDice:
    """Stand-in for random.Random that returns preset rolls in order."""

    def __init__(self, *rolls):
        self.rolls = list(rolls)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.rolls.pop(0)


@pytest.fixture
def dice():
    return ScriptedDice


@pytest.fixture(autouse=True)
def reset_stats():
    war_logger.reset_stats()
    yield
    war_logger.reset_stats()
