from __future__ import annotations
from typing import Any, Awaitable, Callable, Mapping, Sequence, Union

# A feed item is whatever the API returned (usually a dict); only "id" matters here.
Item = Union[Mapping[str, Any], Any]
FeedSource = Callable[[], Awaitable[Sequence[Item]]]
Callback = Callable[[Item], Any]


def item_id(item: Item) -> int:
    """Return the integer id of a feed item, dict or object."""
    if isinstance(item, Mapping):
        if "id" not in item:
            raise ValueError(f"feed item has no id: {item!r}")
        value = item["id"]
    else:
        try:
            value = item.id
        except AttributeError:
            raise ValueError(f"feed item has no id: {item!r}") from None
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"feed item id is not an integer: {value!r}")
    return value
