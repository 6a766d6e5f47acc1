"""
Block-presence scanner — the set of block names used anywhere in a tree.
"""
from typing import Any, Iterable, Optional, Set, Union

from .base import ParsedBlock

_NAME_KEYS     = ("name", "blockName")
_CHILDREN_KEYS = ("children", "inner_blocks", "innerBlocks")


def _name(node: Any) -> Optional[str]:
    if isinstance(node, ParsedBlock):
        return node.name
    if isinstance(node, dict):
        for key in _NAME_KEYS:
            if node.get(key):
                return node[key]
    return None


def _children(node: Any) -> Iterable:
    if isinstance(node, ParsedBlock):
        return node.inner_blocks
    if isinstance(node, dict):
        for key in _CHILDREN_KEYS:
            if node.get(key):
                return node[key]
    return ()


def scan(blocks: Union[Iterable, ParsedBlock, dict], found: Optional[Set[str]] = None) -> Set[str]:
    """Every non-empty block name in `blocks`, nested children included.

    Accepts ParsedBlock nodes or plain dicts (`name`/`blockName`,
    `children`/`inner_blocks`/`innerBlocks`). Names found are added to
    `found` when given, so several trees can feed one set.
    """
    found = set() if found is None else found
    if isinstance(blocks, (ParsedBlock, dict)):
        blocks = [blocks]
    for node in blocks or ():
        name = _name(node)
        if name:
            found.add(name)
        scan(_children(node), found)
    return found
