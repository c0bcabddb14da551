"""Reorder top-level documentation sections by registry priority terms."""

from typing import List, Optional, Sequence

from skill_compiler.compressor.tree_builder import FileTreeNode


def match_priority(name: str, priority_terms: Sequence[str]) -> Optional[int]:
    """Index of the first term contained (case-insensitively) in ``name``."""
    lowered = name.lower()
    for index, term in enumerate(priority_terms):
        if term.lower() in lowered:
            return index
    return None


def prioritize(tree: List[FileTreeNode], priority_terms: Sequence[str]) -> List[FileTreeNode]:
    """
    Move nodes matching a priority term to the front.

    Each node lands in the slot of the first term it matches; slots are
    emitted in term order, followed by unmatched nodes in their original
    order. Several nodes matching the same term keep their relative order
    within the slot.

    Args:
        tree: Top-level nodes
        priority_terms: Ordered substrings from the registry

    Returns:
        Reordered top-level nodes (the input list itself when there are no terms)
    """
    if not priority_terms:
        return tree

    slots: List[List[FileTreeNode]] = [[] for _ in priority_terms]
    remaining: List[FileTreeNode] = []

    for node in tree:
        index = match_priority(node.name, priority_terms)
        if index is None:
            remaining.append(node)
        else:
            slots[index].append(node)

    ordered = [node for slot in slots for node in slot]
    return ordered + remaining
