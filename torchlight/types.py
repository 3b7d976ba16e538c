# torchlight/types.py
from __future__ import annotations

import uuid
from typing import NewType, Tuple, TypeAlias

EntityId = NewType("EntityId", int)
ArchetypeMask = NewType("ArchetypeMask", int)

PlayerId: TypeAlias = uuid.UUID
WorldId: TypeAlias = uuid.UUID

Rgb = Tuple[int, int, int]  # r, g, b in 0..255
