from typing import Any, Dict, List, Type

import numpy as np

from torchlight.types import ArchetypeMask, EntityId


class Archetype:
    """
    One table per component combination. Components that declare a
    ``__soa_dtype__`` are packed into a numpy structured array, everything
    else lives in a plain list column.
    """

    def __init__(self, mask: ArchetypeMask, types: List[Type[Any]]):
        self.mask = mask
        self.types = types
        self.entities: List[EntityId] = []

        self.arrays: Dict[Type[Any], np.ndarray] = {}  # SoA columns
        self.objects: Dict[Type[Any], List[Any]] = {}  # object columns
        self.capacity = 16
        self.count = 0

        for t in types:
            if hasattr(t, "__soa_dtype__"):
                dtype = getattr(t, "__soa_dtype__")
                self.arrays[t] = np.zeros(self.capacity, dtype=dtype)
            else:
                self.objects[t] = []

    def add(self, eid: EntityId, comp_data: Dict[Type[Any], Any]) -> int:
        """Appends a new entity and its data to the columns."""
        idx = self.count

        if idx >= self.capacity:
            self._resize(self.capacity * 2)

        self.entities.append(eid)

        for t in self.types:
            component = comp_data[t]

            if t in self.arrays:
                self.arrays[t][idx] = pack_row(component)
            else:
                self.objects[t].append(component)

        self.count += 1
        return idx

    def _resize(self, new_cap: int) -> None:
        self.capacity = new_cap
        for t, arr in self.arrays.items():
            old_arr = arr
            self.arrays[t] = np.zeros(new_cap, dtype=old_arr.dtype)
            self.arrays[t][: self.count] = old_arr[: self.count]

    def remove(self, row_idx: int) -> EntityId:
        """
        Removes an entity via Swap-and-Pop to keep memory contiguous.
        Returns the EntityId of the entity that was moved into the gap.
        """
        last_idx = self.count - 1
        moved_entity = self.entities[last_idx]

        # Removing the last row only needs a pop.
        if row_idx == last_idx:
            self.entities.pop()
            for col in self.objects.values():
                col.pop()
            self.count -= 1
            return EntityId(-1)

        self.entities[row_idx] = moved_entity
        self.entities.pop()

        for col in self.objects.values():
            col[row_idx] = col[-1]
            col.pop()

        for arr in self.arrays.values():
            arr[row_idx] = arr[last_idx]

        self.count -= 1
        return moved_entity


def pack_row(component: Any) -> tuple:
    """Flattens a SoA component into a tuple ordered like its dtype."""
    return tuple(
        getattr(component, field_def[0])
        for field_def in type(component).__soa_dtype__
    )


def unpack_row(comp_type: Type[Any], raw: Any) -> Any:
    """Re-inflates a dataclass component from a numpy void record."""
    kwargs = {}
    for field_def in comp_type.__soa_dtype__:
        name = field_def[0]
        # .item() turns numpy scalars back into plain ints/floats
        kwargs[name] = raw[name].item()
    return comp_type(**kwargs)
