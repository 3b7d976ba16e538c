from __future__ import annotations

from typing import List, Optional

from torchlight.brightness.light import format_rgb, parse_rgb
from torchlight.brightness.service import BrightnessService
from torchlight.core.world import World
from torchlight.errors import CommandError
from torchlight.server.commands import Command, CommandContext
from torchlight.server.session import GameMode, PlayerSession
from torchlight.types import Rgb

CLEAR_WORDS = ("clear", "off", "reset")


def parse_float(token: str, what: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise CommandError(f"{what} must be a number, got '{token}'.") from None


def parse_tint_args(args: List[str]) -> Rgb:
    """Either one hex colour or three 0-255 channels."""
    if len(args) == 1:
        try:
            return parse_rgb(args[0])
        except ValueError as e:
            raise CommandError(str(e)) from None

    if len(args) == 3:
        channels = []
        for token in args:
            try:
                channels.append(max(0, min(255, int(token))))
            except ValueError:
                raise CommandError(f"Colour channels must be integers, got '{token}'.") from None
        return (channels[0], channels[1], channels[2])

    raise CommandError("Expected a colour like #ffcc88 or three channels like 255 204 136.")


class BrightnessCommand(Command):
    """
    /brightness [<value> | clear | status]
    /brightness tint <#rrggbb | r g b | clear>
    /brightness warmth <0..1 | clear>

    With no arguments the boost is cleared, same as "clear".
    """

    name = "brightness"
    description = "Boosts the light around you while you carry a torch."
    usage = "/brightness [value|clear|status] | tint <#rrggbb|r g b|clear> | warmth <0-1|clear>"
    permission_group = GameMode.ADVENTURE

    def __init__(self, service: BrightnessService):
        self.service = service

    def execute(self, ctx: CommandContext, args: List[str]) -> None:
        if not ctx.is_player():
            ctx.send_message("This command can only be used by a player.")
            return

        sender = ctx.sender
        world = ctx.universe.get_world(sender.world_id)
        if world is None:
            ctx.send_message("Unable to find your current world.")
            return

        if args and args[0].lower() == "status":
            self._send_status(sender)
            return

        head, rest = (args[0].lower(), args[1:]) if args else ("clear", [])
        player = sender.player_id

        if head in CLEAR_WORDS:
            self.service.set_desired_brightness(player, None)
        elif head == "tint":
            if not rest:
                raise CommandError("Missing colour.")
            tint = None if rest[0].lower() in CLEAR_WORDS else parse_tint_args(rest)
            self.service.set_desired_tint(player, tint)
            if tint is not None:
                sender.send_message(f"Tint set to {format_rgb(tint)}.")
            else:
                sender.send_message("Tint cleared.")
        elif head == "warmth":
            if not rest:
                raise CommandError("Missing warmth value.")
            warmth: Optional[float] = None
            if rest[0].lower() not in CLEAR_WORDS:
                warmth = parse_float(rest[0], "Warmth")
            self.service.set_desired_warmth(player, warmth)
            if warmth is not None:
                sender.send_message(f"Warmth set to {max(0.0, min(1.0, warmth)):g}.")
            else:
                sender.send_message("Warmth cleared.")
        else:
            if rest:
                raise CommandError(f"Unexpected arguments: {' '.join(rest)}")
            self.service.set_desired_brightness(player, parse_float(head, "Brightness"))

        self._sync(world, sender)

    def _sync(self, world: World, sender: PlayerSession) -> None:
        # Unlike background syncs, tell the player when their entity is missing
        host = self.service.host_for(world)
        player = sender.player_id

        def run() -> None:
            if not sender.is_valid():
                return
            if world.entity_ref(player) is None:
                sender.send_message("Unable to locate your player entity.")
                return
            self.service.reconcile(host, player, announce=True)

        host.run_on_owning_context(player, run)

    def _send_status(self, sender: PlayerSession) -> None:
        status = self.service.status(sender.player_id)
        if status.brightness is None:
            sender.send_message("Brightness boost is off.")
            return

        if status.tint is not None:
            colour = f"tint {format_rgb(status.tint)}"
        elif status.warmth is not None:
            colour = f"warmth {status.warmth:g}"
        else:
            colour = "torch colour"

        state = "active" if status.active else "waiting for a torch"
        sender.send_message(
            f"Brightness {self.service.clamp_brightness(status.brightness):g}, {colour} ({state})."
        )
