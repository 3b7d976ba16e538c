import threading
from typing import Any, Dict, Type

from torchlight.types import ArchetypeMask


class ComponentRegistry:
    _counter: int = 0
    _type_to_id: Dict[Type[Any], int] = {}
    _type_to_mask: Dict[Type[Any], ArchetypeMask] = {}
    _lock = threading.Lock()

    @classmethod
    def get_id(cls, component_type: Type[Any]) -> int:
        # Worlds on different threads may register the same type at once
        with cls._lock:
            if component_type not in cls._type_to_id:
                cls._type_to_id[component_type] = cls._counter
                cls._counter += 1
            return cls._type_to_id[component_type]

    @classmethod
    def get_mask(cls, component_type: Type[Any]) -> ArchetypeMask:
        mask = cls._type_to_mask.get(component_type)
        if mask is None:
            # Calculate 1 << id
            mask = ArchetypeMask(1 << cls.get_id(component_type))
            cls._type_to_mask[component_type] = mask
        return mask
