from __future__ import annotations

from torchlight.brightness.command import BrightnessCommand
from torchlight.brightness.service import BrightnessService
from torchlight.brightness.settings import DEFAULT_SETTINGS, BrightnessSettings
from torchlight.core.components import PlayerRef
from torchlight.core.events import InventoryChanged, PlayerDisconnected
from torchlight.server.plugin import Plugin
from torchlight.server.universe import Universe


class BrightnessTweaksPlugin(Plugin):
    name = "BrightnessTweaks"
    version = "1.0.0"

    def __init__(self, universe: Universe, settings: BrightnessSettings = DEFAULT_SETTINGS):
        super().__init__(universe)
        self.service = BrightnessService(universe, settings)

    def setup(self) -> None:
        self.register_command(BrightnessCommand(self.service))
        self.listen(InventoryChanged, self.on_inventory_changed)
        self.listen(PlayerDisconnected, self.on_player_disconnected)

    def on_inventory_changed(self, event: InventoryChanged) -> None:
        # Fired on the world thread, so reading components is safe here
        ref = event.world.component(event.entity, PlayerRef)
        if ref is None:
            return

        if not self.service.has_state(ref.player_id):
            return
        self.service.sync_player(event.world, ref.player_id, announce=False)

    def on_player_disconnected(self, event: PlayerDisconnected) -> None:
        self.service.clear_player(event.player_id)
