from typing import Optional

from torchlight.constants import QUALIFYING_ITEM_KEYWORD
from torchlight.core.components import Inventory, ItemStack


def is_qualifying_item(
    stack: Optional[ItemStack], keyword: str = QUALIFYING_ITEM_KEYWORD
) -> bool:
    if stack is None or stack.is_empty:
        return False
    return keyword in stack.item_id


def has_qualifying_item(
    inventory: Optional[Inventory], keyword: str = QUALIFYING_ITEM_KEYWORD
) -> bool:
    """True if the equipped utility item or any utility belt slot qualifies."""
    if inventory is None:
        return False

    if is_qualifying_item(inventory.utility_item, keyword):
        return True

    return any(is_qualifying_item(stack, keyword) for stack in inventory.utility)
