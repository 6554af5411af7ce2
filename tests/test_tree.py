# tests/test_tree.py

from __future__ import annotations

import pytest

from task_stickies.core.errors import NotFound
from task_stickies.tasks.task_models import FilterStatus, TaskNode
from task_stickies.tasks.tree import filter_tasks, find_task, require_task, status_predicate


def t(task_id: str, checked: bool = False, *children: TaskNode) -> TaskNode:
    return TaskNode(id=task_id, text=task_id, checked=checked, indent=0, children=list(children))


def ids(forest: list[TaskNode]) -> list:
    """Nested (id, [children...]) shape for easy comparisons."""
    return [(n.id, ids(n.children)) for n in forest]


@pytest.fixture()
def forest() -> list[TaskNode]:
    #  a
    #    b (checked)
    #    c
    #      d
    #  e (checked)
    #    f
    return [
        t("a", False, t("b", True), t("c", False, t("d", False))),
        t("e", True, t("f", False)),
    ]


def test_find_returns_node_and_owning_siblings(forest) -> None:
    found = find_task(forest, "d")
    assert found is not None
    node, siblings = found
    assert node.id == "d"
    assert siblings is forest[0].children[1].children

    node, siblings = find_task(forest, "e")
    assert siblings is forest


def test_find_every_unique_id_and_missing(forest) -> None:
    for task_id in "abcdef":
        found = find_task(forest, task_id)
        assert found is not None and found[0].id == task_id

    assert find_task(forest, "zzz") is None
    assert find_task([], "a") is None
    with pytest.raises(NotFound):
        require_task(forest, "zzz")


def test_find_duplicate_ids_first_in_preorder_wins() -> None:
    deep_dup = t("dup", False)
    later_dup = t("dup", True)
    forest = [t("root", False, t("x", False, deep_dup)), later_dup]

    node, _ = find_task(forest, "dup")
    assert node is deep_dup


def test_find_parent_before_children() -> None:
    parent = t("same", False)
    parent.children.append(t("same", True))
    node, siblings = find_task([parent], "same")
    assert node is parent


def test_filter_keeps_ancestor_of_checked_child() -> None:
    forest = [t("a", False, t("b", True))]
    out = filter_tasks(forest, status_predicate(FilterStatus.CHECKED))
    assert ids(out) == [("a", [("b", [])])]
    assert out[0].checked is False
    assert out[0].children[0].checked is True


def test_filter_checked(forest) -> None:
    out = filter_tasks(forest, status_predicate(FilterStatus.CHECKED))
    # c/d have no checked descendants -> dropped; f unchecked leaf -> dropped
    assert ids(out) == [("a", [("b", [])]), ("e", [])]


def test_filter_unchecked(forest) -> None:
    out = filter_tasks(forest, status_predicate(FilterStatus.UNCHECKED))
    assert ids(out) == [("a", [("c", [("d", [])])]), ("e", [("f", [])])]


def test_filter_all_keeps_everything(forest) -> None:
    out = filter_tasks(forest, status_predicate(FilterStatus.ALL))
    assert ids(out) == ids(forest)


def test_filter_sole_surviving_path_through_unmatched_ancestors() -> None:
    target = t("n", True)
    forest = [
        t("a1", False, t("a2", False, t("sib", False, t("leaf", False)), t("a3", False, target))),
        t("other", False, t("x", False)),
    ]
    out = filter_tasks(forest, status_predicate(FilterStatus.CHECKED))
    assert ids(out) == [("a1", [("a2", [("a3", [("n", [])])])])]


def test_filter_is_idempotent(forest) -> None:
    pred = status_predicate(FilterStatus.CHECKED)
    once = filter_tasks(forest, pred)
    twice = filter_tasks(once, pred)
    assert twice == once


def test_filter_does_not_mutate_input(forest) -> None:
    before = ids(forest)
    filter_tasks(forest, status_predicate(FilterStatus.CHECKED))
    assert ids(forest) == before


def test_deep_forest_does_not_hit_recursion_limit() -> None:
    depth = 5000
    root = t("n0", False)
    cur = root
    for i in range(1, depth):
        child = t(f"n{i}", False)
        cur.children.append(child)
        cur = child
    cur.checked = True

    node, siblings = find_task([root], f"n{depth - 1}")
    assert node is cur
    assert len(siblings) == 1 and siblings[0] is cur

    out = filter_tasks([root], status_predicate(FilterStatus.CHECKED))
    n = out[0]
    for _ in range(depth - 1):
        assert len(n.children) == 1
        n = n.children[0]
    assert n.id == f"n{depth - 1}"
