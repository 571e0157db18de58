"""
Flattening and rebuilding of localization trees.

    >>> flatten({"app": {"title": "Test App"}, "nav": {"home": "Home"}})
    [('app.title', 'Test App'), ('nav.home', 'Home')]
    >>> rebuild([("app.title", "Application"), ("nav.home", "Accueil")])
    {'app': {'title': 'Application'}, 'nav': {'home': 'Accueil'}}

Only string leaves survive the round trip. Numbers, booleans, nulls and
lists are skipped by flatten and therefore absent from a rebuilt tree.
"""

from __future__ import annotations

from typing import Any, Iterable

from loctrans.models import Tree

KEY_SEPARATOR = "."


def _join(prefix: str, name: str) -> str:
    return f"{prefix}{KEY_SEPARATOR}{name}" if prefix else name


def flatten(tree: Tree, prefix: str = "") -> list[tuple[str, str]]:
    """Collect the translatable string leaves of a tree.
    
    Walks depth-first in insertion order. Strings that are blank after
    stripping are skipped, as are numbers, booleans, None and lists.
    
    Args:
        tree: Parsed localization document
        prefix: Key path of ``tree`` inside its parent
        
    Returns:
        Ordered list of (dotted key, original text) pairs
    """
    pairs: list[tuple[str, str]] = []
    for name, value in tree.items():
        key = _join(prefix, str(name))
        if isinstance(value, str):
            if value.strip():
                pairs.append((key, value))
        elif isinstance(value, dict):
            pairs.extend(flatten(value, key))
    return pairs


def count_leaves(tree: Tree) -> int:
    """Count string leaves reachable through nested mappings.
    
    Unlike flatten, blank strings are counted too.
    """
    count = 0
    for value in tree.values():
        if isinstance(value, str):
            count += 1
        elif isinstance(value, dict):
            count += count_leaves(value)
    return count


def set_nested_value(tree: Tree, key: str, value: Any) -> None:
    """Assign ``value`` at a dotted key, creating mappings on the way.
    
    A non-mapping found on the path is replaced by an empty mapping.
    Empty segments are ignored; an empty last segment assigns nothing.
    """
    *parents, last = key.split(KEY_SEPARATOR)
    current = tree
    for segment in parents:
        if not segment:
            continue
        if not isinstance(current.get(segment), dict):
            current[segment] = {}
        current = current[segment]
    if last:
        current[last] = value


def rebuild(pairs: Iterable[tuple[str, Any]]) -> Tree:
    """Build a nested tree from (dotted key, value) pairs, in order."""
    tree: Tree = {}
    for key, value in pairs:
        set_nested_value(tree, key, value)
    return tree
