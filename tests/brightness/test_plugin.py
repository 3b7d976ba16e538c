from torchlight.brightness.service import MSG_REVERTED
from torchlight.core.components import ColorLight, DynamicLight, Inventory
from tests.conftest import STICK, torch_inventory


def light_of(world, session):
    eid = world.entity_ref(session.player_id)
    light = world.component(eid, DynamicLight)
    return light.color_light if light is not None else None


def test_command_installs_light(universe, overworld, plugin, player):
    universe.run_command(player, "/brightness 1")
    overworld.run_pending()

    assert light_of(overworld, player) == ColorLight(32, 255, 255, 255)
    assert player.messages[-1] == "Brightness tweaked to 1 (radius 32, rgb 255/255/255)."


def test_existing_torch_light_becomes_baseline(universe, overworld, plugin, player):
    eid = overworld.entity_ref(player.player_id)
    overworld.add_component(eid, DynamicLight(10, 200, 200, 200))

    universe.run_command(player, "/brightness warmth 1")
    universe.run_command(player, "/brightness 0.5")
    overworld.run_pending()

    assert light_of(overworld, player) == ColorLight(21, 227, 200, 200)
    assert plugin.service.boosts.baseline(player.player_id) == ColorLight(10, 200, 200, 200)


def test_dropping_torch_reverts_light(universe, overworld, plugin, player):
    universe.run_command(player, "/brightness 0.8")
    overworld.run_pending()
    player.drain_messages()

    universe.set_inventory(player.player_id, Inventory(utility=(STICK,)))
    overworld.run_pending()

    assert light_of(overworld, player) is None
    assert not plugin.service.boosts.is_active(player.player_id)
    assert player.messages == [MSG_REVERTED]


def test_picking_torch_back_up_restores_boost(universe, overworld, plugin, player):
    universe.run_command(player, "/brightness 1")
    universe.set_inventory(player.player_id, Inventory())
    overworld.run_pending()
    assert light_of(overworld, player) is None

    universe.set_inventory(player.player_id, torch_inventory())
    overworld.run_pending()

    assert light_of(overworld, player) == ColorLight(32, 255, 255, 255)


def test_inventory_change_without_state_is_ignored(universe, overworld, plugin, player):
    universe.set_inventory(player.player_id, Inventory())
    overworld.run_pending()

    assert light_of(overworld, player) is None
    assert player.messages == []


def test_inventory_change_of_non_player_entity_is_ignored(universe, overworld, plugin):
    from torchlight.core.events import InventoryChanged

    eid = overworld.create_entity()
    universe.events.dispatch(InventoryChanged(overworld, eid))

    assert overworld.pending == 0


def test_disconnect_purges_state(universe, overworld, plugin, player):
    pid = player.player_id
    universe.run_command(player, "/brightness tint #ff8800")
    universe.run_command(player, "/brightness 1")
    overworld.run_pending()
    assert plugin.service.boosts.is_active(pid)

    universe.disconnect(pid)
    overworld.run_pending()

    assert not plugin.service.desired.contains(pid)
    assert not plugin.service.boosts.is_active(pid)
    assert plugin.service.boosts.baseline(pid) is None
    assert overworld.entity_ref(pid) is None


def test_shutdown_unregisters_everything(universe, overworld, player):
    from torchlight.brightness import BrightnessTweaksPlugin

    plugin = BrightnessTweaksPlugin(universe)
    plugin.enable()
    assert "brightness" in universe.commands

    plugin.shutdown()

    assert "brightness" not in universe.commands
    ctx = universe.run_command(player, "/brightness 1")
    assert player.messages == ["Unknown command: brightness"]
    assert ctx.sender is player
