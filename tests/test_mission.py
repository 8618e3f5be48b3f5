import pytest

from war.exceptions import MissionError
from war.mission import MissionBook, create_mission


def test_create_mission():
    mission = create_mission("Eliminar jogador 2", 2)
    assert mission.description == "Eliminar jogador 2"
    assert mission.target_owner == 2
    assert mission.to_dict() == {'description': "Eliminar jogador 2", 'target_owner': 2}


def test_target_owner_is_not_checked_against_players():
    assert create_mission("Eliminar jogador 99", 99).target_owner == 99


@pytest.mark.parametrize("description, target", [(None, 1), ("ok", "2"), ("ok", None)])
def test_create_mission_rejects_bad_input(description, target):
    with pytest.raises(MissionError):
        create_mission(description, target)


def test_mission_book():
    book = MissionBook()
    first = book.create_mission("Conquistar 3 territórios da região Norte", 0)
    second = book.create_mission("Eliminar jogador 2", 2)

    assert len(book) == 2
    assert list(book) == [first, second]
    assert book.get_missions_for(2) == [second]
    assert book.to_dict()[0]['target_owner'] == 0
