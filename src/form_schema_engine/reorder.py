"""
Array relocation for drag-and-drop reordering.

`move` is the pure law; `move_by_id` is the adapter drag events go through.
Drag events name elements by id, and ids are translated to indices at apply
time so a stale index from an earlier state can never move the wrong element.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


def _default_key(item: Any) -> Any:
    return getattr(item, "id", None)


def move(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """
    Remove the element at `from_index` and reinsert it at `to_index`.

    Always returns a new list of the same length; other elements keep their
    relative order.
    """
    size = len(items)
    for name, index in (("from_index", from_index), ("to_index", to_index)):
        if not 0 <= index < size:
            raise IndexError(f"{name} {index} out of range for {size} items")
    out = list(items)
    out.insert(to_index, out.pop(from_index))
    return out


def index_of(items: Sequence[T], item_id: Any, *, key: Callable[[T], Any] = _default_key) -> Optional[int]:
    for i, item in enumerate(items):
        if key(item) == item_id:
            return i
    return None


def move_by_id(
    items: Sequence[T],
    active_id: Any,
    over_id: Any,
    *,
    key: Callable[[T], Any] = _default_key,
) -> List[T]:
    """
    Move the element `active_id` to the position currently held by `over_id`.

    Unknown ids, or dropping an element onto itself, leave the order unchanged.
    """
    if active_id == over_id:
        return list(items)
    old_index = index_of(items, active_id, key=key)
    new_index = index_of(items, over_id, key=key)
    if old_index is None or new_index is None:
        return list(items)
    return move(items, old_index, new_index)
