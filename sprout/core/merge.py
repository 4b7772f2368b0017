"""Recursive merging of JSON-like configuration trees."""
import copy
from typing import Any, Dict, Mapping


def deep_merge(new: Mapping[str, Any], existing: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``new`` onto ``existing`` and return a fresh dictionary.

    For each key, when both sides hold mappings the merge recurses;
    otherwise the value from ``new`` wins. Keys only present in
    ``existing`` are kept, in their original order. Lists are replaced,
    never concatenated. Neither argument is modified.

    Example:
        >>> deep_merge({"scripts": {"dev": "vite"}}, {"license": "MIT", "scripts": {"test": "x"}})
        {'license': 'MIT', 'scripts': {'test': 'x', 'dev': 'vite'}}
    """
    merged: Dict[str, Any] = {key: copy.deepcopy(value) for key, value in existing.items()}

    for key, value in new.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(value, current)
        else:
            merged[key] = copy.deepcopy(value)

    return merged
