"""
Headless demo server.

Spins up one world on its own thread, connects a player holding a torch,
and walks through the /brightness command while the inventory changes.

Run:
    python main.py [--tps 30] [--verbose]
"""

from __future__ import annotations

import argparse
import logging
import time

from torchlight.brightness import BrightnessTweaksPlugin
from torchlight.constants import WORLD_TPS
from torchlight.core.components import DynamicLight, Inventory, ItemStack
from torchlight.server.runner import WorldRunner
from torchlight.server.universe import Universe


def settle(runner: WorldRunner) -> None:
    """Wait for the world thread to catch up with queued work."""
    deadline = time.perf_counter() + 1.0
    while runner.world.pending and time.perf_counter() < deadline:
        time.sleep(runner.timer.dt)
    time.sleep(runner.timer.dt * 2)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--tps", type=int, default=WORLD_TPS)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    universe = Universe()
    world = universe.create_world("overworld")
    runner = WorldRunner(world, tps=args.tps)

    plugin = BrightnessTweaksPlugin(universe)
    plugin.enable()
    runner.start()

    torch = Inventory(utility=(ItemStack("Furniture_Crude_Torch"),))
    player = universe.connect("steve", world, inventory=torch)
    settle(runner)

    script = [
        "/brightness 0.5",
        "/brightness warmth 0.8",
        "/brightness 1.0",
        "/brightness status",
    ]
    for line in script:
        universe.run_command(player, line)
        settle(runner)

    universe.set_inventory(player.player_id, Inventory())
    settle(runner)

    lit = None

    def inspect() -> None:
        nonlocal lit
        eid = world.entity_ref(player.player_id)
        lit = eid is not None and world.has(eid, DynamicLight)

    world.execute(inspect)
    settle(runner)

    for message in player.drain_messages():
        print(f"[{player.username}] {message}")
    print(f"DynamicLight installed: {lit}")

    universe.disconnect(player.player_id)
    runner.stop()
    plugin.shutdown()


if __name__ == "__main__":
    main()
