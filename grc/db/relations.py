"""
Bidirectional relationship helpers.

Every association between entities is mutated through one of these helpers
so both ends are updated in the same call. The helpers work on attribute
names, so the same pair serves every one-to-many (``add_child`` /
``remove_child``) and many-to-many (``add_peer`` / ``remove_peer``)
association. They only touch in-memory state; flushing is left to the
session owner.

The ORM relationships are declared with ``back_populates`` as well, which
mirrors plain ``append``/``remove`` calls. The explicit checks below keep the
collections free of duplicates and make the ownership rules independent of
that event machinery.
"""
from __future__ import annotations

from typing import Any


def add_child(parent: Any, child: Any, collection: str, back_reference: str) -> Any:
    """Attach ``child`` to ``parent`` on a one-to-many association.

    A child that still belongs to another parent is first pruned from that
    parent's collection so it is never listed by two parents at once.
    """
    children = getattr(parent, collection)
    if child in children:
        return parent

    previous = getattr(child, back_reference)
    if previous is not None and previous is not parent:
        stale = getattr(previous, collection)
        if child in stale:
            stale.remove(child)

    children.append(child)
    if getattr(child, back_reference) is not parent:
        setattr(child, back_reference, parent)
    return parent


def remove_child(parent: Any, child: Any, collection: str, back_reference: str) -> Any:
    """Detach ``child`` from ``parent``.

    The back-reference is cleared only while it still points at ``parent``;
    a child that has since moved elsewhere keeps its new parent.
    """
    children = getattr(parent, collection)
    if child not in children:
        return parent

    children.remove(child)
    if getattr(child, back_reference) is parent:
        setattr(child, back_reference, None)
    return parent


def add_peer(a: Any, b: Any, collection: str, reciprocal: str) -> Any:
    """Link ``a`` and ``b`` on a symmetric many-to-many association."""
    peers = getattr(a, collection)
    if b not in peers:
        peers.append(b)
    others = getattr(b, reciprocal)
    if a not in others:
        others.append(a)
    return a


def remove_peer(a: Any, b: Any, collection: str, reciprocal: str) -> Any:
    """Unlink ``a`` and ``b`` in both directions."""
    peers = getattr(a, collection)
    if b in peers:
        peers.remove(b)
    others = getattr(b, reciprocal)
    if a in others:
        others.remove(a)
    return a


__all__ = ["add_child", "remove_child", "add_peer", "remove_peer"]
