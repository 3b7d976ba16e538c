import uuid

import pytest

from torchlight.core.components import Inventory, Player, PlayerRef
from torchlight.core.events import InventoryChanged, PlayerDisconnected
from torchlight.core.world import World
from torchlight.errors import PlayerUnavailable
from tests.conftest import STICK


def test_connect_spawns_entity_on_world_thread(universe, overworld):
    session = universe.connect("alex", overworld)

    assert universe.get_player(session.player_id) is session
    assert overworld.entity_ref(session.player_id) is None

    overworld.run_pending()

    eid = overworld.entity_ref(session.player_id)
    assert overworld.component(eid, PlayerRef).username == "alex"
    assert overworld.has(eid, Player)


def test_connect_to_foreign_world_fails(universe):
    with pytest.raises(KeyError):
        universe.connect("alex", World("elsewhere"))


def test_disconnect_despawns_and_notifies(universe, overworld, player):
    seen = []
    universe.events.register(PlayerDisconnected, seen.append)

    universe.disconnect(player.player_id)
    overworld.run_pending()

    assert seen == [PlayerDisconnected(player.player_id)]
    assert universe.get_player(player.player_id) is None
    assert overworld.entity_ref(player.player_id) is None
    assert not player.is_valid()


def test_disconnect_unknown_player_is_noop(universe):
    seen = []
    universe.events.register(PlayerDisconnected, seen.append)

    universe.disconnect(uuid.uuid4())

    assert seen == []


def test_set_inventory_fires_event_from_world_thread(universe, overworld, player):
    seen = []
    universe.events.register(
        InventoryChanged, lambda e: seen.append((e.entity, overworld.in_world_thread()))
    )

    universe.set_inventory(player.player_id, Inventory(utility=(STICK,)))
    assert seen == []
    overworld.run_pending()

    eid = overworld.entity_ref(player.player_id)
    assert seen == [(eid, True)]
    assert overworld.component(eid, Player).inventory.utility == (STICK,)


def test_set_inventory_for_unknown_player(universe):
    with pytest.raises(PlayerUnavailable):
        universe.set_inventory(uuid.uuid4(), Inventory())


def test_invalidated_session_drops_messages(player):
    player.send_message("hello")
    player.invalidate()
    player.send_message("ignored")

    assert player.drain_messages() == ["hello"]
    assert player.messages == []
