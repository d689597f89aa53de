"""
Layered merging of configuration dictionaries.

Later layers win. Inside a layer, a ``+name`` or ``-name`` key edits the list
inherited from earlier layers instead of replacing it, and a ``None`` value
deletes the setting.
"""

from collections.abc import Callable
from functools import reduce
from typing import Any

ListEdit = Callable[[list[Any], list[Any]], list[Any]]


def _extend_unique(current: list[Any], items: list[Any]) -> list[Any]:
    return current + [item for item in items if item not in current]


def _remove_all(current: list[Any], items: list[Any]) -> list[Any]:
    return [item for item in current if item not in items]


# Key prefix -> list edit
LIST_EDITS: dict[str, ListEdit] = {"+": _extend_unique, "-": _remove_all}


def _list_edit(key: str, value: Any) -> ListEdit | None:
    if len(key) < 2 or not isinstance(value, list):
        return None
    return LIST_EDITS.get(key[0])


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge one configuration layer over another.

    - ``{"+disabled": [...]}`` appends the missing items to ``disabled``
    - ``{"-disabled": [...]}`` drops those items from ``disabled``
    - ``{"key": None}`` removes ``key``
    - nested mappings merge key by key; anything else replaces

    A list edit on a setting that is not a list starts from an empty list.
    Neither input is modified.

    Example:
        >>> deep_merge({"plugins": {"disabled": ["a@m"]}}, {"plugins": {"+disabled": ["b@m"]}})
        {'plugins': {'disabled': ['a@m', 'b@m']}}
    """
    merged = dict(base)

    for key, value in override.items():
        edit = _list_edit(key, value)
        if edit is not None:
            name = key[1:]
            inherited = merged.get(name)
            merged[name] = edit(inherited if isinstance(inherited, list) else [], value)
        elif value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def merge_layers(first: dict[str, Any], *rest: dict[str, Any]) -> dict[str, Any]:
    """Merge layers left to right, so the last one wins."""
    return reduce(deep_merge, rest, dict(first))


def get_nested_value(config: dict[str, Any], key_path: str) -> Any:
    """Look up a dotted path such as ``logging.level``; None when any part is missing."""
    node: Any = config
    for part in key_path.split("."):
        node = node.get(part) if isinstance(node, dict) else None
        if node is None:
            return None
    return node


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """Assign a dotted path in place, replacing non-mapping parents with dicts."""
    *parents, leaf = key_path.split(".")

    def child(node: dict[str, Any], part: str) -> dict[str, Any]:
        if not isinstance(node.get(part), dict):
            node[part] = {}
        return node[part]

    reduce(child, parents, config)[leaf] = value
    return config
