from __future__ import annotations

import logging
import queue
import threading
import uuid
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    TypeVarTuple,
    Unpack,
)

from torchlight.core.archetype import Archetype, pack_row, unpack_row
from torchlight.core.components import PlayerRef
from torchlight.core.registry import ComponentRegistry
from torchlight.types import ArchetypeMask, EntityId, PlayerId, WorldId

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
Cs = TypeVarTuple("Cs")  # variadic component types for join()

Task = Callable[[], None]


class EntityRecord:
    __slots__ = ("archetype", "row")

    def __init__(self, archetype: Archetype, row: int):
        self.archetype = archetype
        self.row = row


class World:
    """
    Entity store for one world.

    Component data is only touched from the thread that owns the world.
    Other threads hand work over with execute(); the owner drains it with
    run_pending() once per tick.
    """

    def __init__(self, name: str = "default", world_id: WorldId | None = None):
        self.name = name
        self.world_id: WorldId = world_id or uuid.uuid4()
        self._next_id: int = 1

        # ECS data
        self._archetypes: Dict[int, Archetype] = {}
        self._entities: Dict[EntityId, EntityRecord] = {}

        # Cross-thread task hand-off
        self._tasks: queue.Queue[Task] = queue.Queue()
        self._owner: Optional[int] = None

        # Initialize the "Empty" archetype (Mask 0)
        self._get_or_create_archetype(ArchetypeMask(0), [])

    def __repr__(self) -> str:
        return f"World({self.name!r}, entities={len(self._entities)})"

    # TASKS
    def execute(self, task: Task) -> None:
        """Queues a task for the world's thread. Safe from any thread."""
        self._tasks.put(task)

    def run_pending(self) -> int:
        """
        Runs every queued task on the calling thread, which becomes the
        world's owner. A failing task is logged and does not stop the rest.
        Returns how many tasks ran.
        """
        self._owner = threading.get_ident()
        ran = 0
        while True:
            try:
                task = self._tasks.get_nowait()
            except queue.Empty:
                break

            try:
                task()
            except Exception:
                _LOGGER.exception("Task failed in world %s", self.name)
            ran += 1

        return ran

    @property
    def pending(self) -> int:
        return self._tasks.qsize()

    def in_world_thread(self) -> bool:
        return self._owner == threading.get_ident()

    # ENTITY MANAGEMENT

    def create_entity(self, *components: Any) -> EntityId:
        """Creates an entity, optionally with starting components."""
        eid = EntityId(self._next_id)
        self._next_id += 1

        arch = self._archetypes[ArchetypeMask(0)]
        row = arch.add(eid, {})
        self._entities[eid] = EntityRecord(arch, row)

        for c in components:
            self.add_component(eid, c)

        return eid

    def delete_entity(self, eid: EntityId) -> None:
        if eid not in self._entities:
            return

        record = self._entities[eid]
        moved_eid = record.archetype.remove(record.row)

        if moved_eid != -1:
            self._entities[moved_eid].row = record.row

        del self._entities[eid]

    def exists(self, eid: EntityId) -> bool:
        return eid in self._entities

    def entity_ref(self, player_id: PlayerId) -> Optional[EntityId]:
        """Finds the entity controlled by a connected player."""
        for eid, ref in self.join(PlayerRef):
            if ref.player_id == player_id:
                return eid
        return None

    # COMPONENT MANAGEMENT
    def add_component(self, eid: EntityId, component: object) -> None:
        record = self._entities[eid]
        old_arch = record.archetype
        comp_type = type(component)
        comp_mask = ComponentRegistry.get_mask(comp_type)

        if old_arch.mask & comp_mask:
            self.mutate_component(eid, component)
            return

        new_mask = ArchetypeMask(old_arch.mask | comp_mask)
        self._move_entity(eid, record, new_mask, add_component=component)

    def remove_component(
        self, eid: EntityId, component_type: Type[Any]
    ) -> bool:
        """Detaches a component. Returns False if it was not attached."""
        record = self._entities.get(eid)
        if not record:
            return False

        old_arch = record.archetype
        comp_mask = ComponentRegistry.get_mask(component_type)

        if not (old_arch.mask & comp_mask):
            return False

        # Move to new archetype (current mask MINUS component mask)
        new_mask = ArchetypeMask(old_arch.mask & ~comp_mask)
        self._move_entity(eid, record, new_mask, remove_type=component_type)
        return True

    def mutate_component(self, eid: EntityId, component: Any) -> None:
        """
        Update an EXISTING component with a new instance.
        """
        record = self._entities.get(eid)
        if not record:
            raise KeyError(f"Entity {eid} does not exist.")

        comp_type = type(component)
        arch = record.archetype

        if comp_type in arch.arrays:
            arch.arrays[comp_type][record.row] = pack_row(component)

        elif comp_type in arch.objects:
            arch.objects[comp_type][record.row] = component

        else:
            raise KeyError(
                f"Entity {eid} cannot mutate {comp_type.__name__}: Component missing. "
                "Use world.add_component() to attach new components."
            )

    def component(self, eid: EntityId, component_type: Type[T]) -> Optional[T]:
        record = self._entities.get(eid)
        if not record:
            return None

        arch = record.archetype
        row = record.row

        if component_type in arch.arrays:
            return unpack_row(component_type, arch.arrays[component_type][row])

        if component_type in arch.objects:
            return arch.objects[component_type][row]

        return None

    def has(self, eid: EntityId, component_type: Type[Any]) -> bool:
        record = self._entities.get(eid)
        if not record:
            return False
        mask = ComponentRegistry.get_mask(component_type)
        return bool(record.archetype.mask & mask)

    # QUERIES
    def join(
        self,
        *component_types: Unpack[Tuple[Type[Cs], ...]],
    ) -> Iterator[Tuple[EntityId, *Cs]]:
        """
        Yields (eid, *components) for every entity holding all of the
        given component types.
        """
        query_mask = 0
        for t in component_types:
            query_mask |= ComponentRegistry.get_mask(t)

        # Snapshot so callers may mutate while iterating
        for arch in list(self._archetypes.values()):
            if (arch.mask & query_mask) != query_mask:
                continue
            for i, eid in enumerate(list(arch.entities)):
                components: List[Any] = []
                for t in component_types:
                    if t in arch.arrays:
                        components.append(unpack_row(t, arch.arrays[t][i]))
                    else:
                        components.append(arch.objects[t][i])

                yield (eid, *components)

    # INTERNAL HELPERS

    def _get_or_create_archetype(
        self, mask: ArchetypeMask, types: List[Type[Any]]
    ) -> Archetype:
        if mask not in self._archetypes:
            self._archetypes[mask] = Archetype(mask, types)
        return self._archetypes[mask]

    def _move_entity(
        self,
        eid: EntityId,
        record: EntityRecord,
        new_mask: ArchetypeMask,
        add_component: Any = None,
        remove_type: Type[Any] | None = None,
    ) -> None:
        """Handles the logic of moving an entity between tables"""
        old_arch = record.archetype

        # 1. Collect data for the new archetype
        data = {}
        for t in old_arch.types:
            if t != remove_type:
                if t in old_arch.arrays:
                    data[t] = unpack_row(t, old_arch.arrays[t][record.row])
                else:
                    data[t] = old_arch.objects[t][record.row]

        if add_component is not None:
            data[type(add_component)] = add_component

        # 2. Get new archetype
        new_arch = self._get_or_create_archetype(new_mask, list(data.keys()))

        # 3. Remove from old
        moved_eid = old_arch.remove(record.row)
        if moved_eid != -1:
            self._entities[moved_eid].row = record.row

        # 4. Add to new
        new_row = new_arch.add(eid, data)
        self._entities[eid] = EntityRecord(new_arch, new_row)
