# src/task_stickies/tasks/tree.py

"""
Tree operations over a task forest.

Both traversals use an explicit stack so adversarially deep documents
cannot hit the interpreter recursion limit.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from ..core.errors import NotFound
from .task_models import FilterStatus, TaskNode

TaskPredicate = Callable[[TaskNode], bool]


def find_task(forest: list[TaskNode], task_id: str) -> tuple[TaskNode, list[TaskNode]] | None:
    """
    Depth-first, pre-order search for `task_id`.

    Returns (node, siblings) where `siblings` is the list that directly
    contains the node, so callers can edit it in place. With duplicate ids
    the first node in traversal order wins.
    """
    stack: list[tuple[list[TaskNode], int]] = [(forest, 0)]
    while stack:
        siblings, idx = stack.pop()
        if idx >= len(siblings):
            continue
        node = siblings[idx]
        if node.id == task_id:
            return node, siblings
        # Next sibling resumes after the whole subtree of `node`.
        stack.append((siblings, idx + 1))
        if node.children:
            stack.append((node.children, 0))
    return None


def require_task(forest: list[TaskNode], task_id: str) -> tuple[TaskNode, list[TaskNode]]:
    found = find_task(forest, task_id)
    if found is None:
        raise NotFound(f"Task with ID '{task_id}' not found")
    return found


def status_predicate(status: FilterStatus) -> TaskPredicate:
    if status is FilterStatus.CHECKED:
        return lambda node: node.checked
    if status is FilterStatus.UNCHECKED:
        return lambda node: not node.checked
    return lambda node: True


@dataclass(slots=True)
class _Frame:
    nodes: list[TaskNode]
    owner: TaskNode | None
    idx: int = 0
    kept: list[TaskNode] = field(default_factory=list)


def filter_tasks(forest: list[TaskNode], predicate: TaskPredicate) -> list[TaskNode]:
    """
    Ancestry-preserving prune of `forest`.

    A node survives if it matches `predicate` itself or if any descendant
    survives; it then carries only its surviving children, in original order.
    The input forest is not modified: survivors are shallow copies.
    """
    root = _Frame(nodes=forest, owner=None)
    stack = [root]
    while stack:
        frame = stack[-1]
        if frame.idx < len(frame.nodes):
            node = frame.nodes[frame.idx]
            frame.idx += 1
            if node.children:
                stack.append(_Frame(nodes=node.children, owner=node))
            elif predicate(node):
                frame.kept.append(replace(node, children=[]))
            continue

        stack.pop()
        owner = frame.owner
        if owner is None:
            break
        if frame.kept or predicate(owner):
            stack[-1].kept.append(replace(owner, children=frame.kept))

    return root.kept
