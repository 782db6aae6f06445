"""
Curriculum tree traversal utilities.

Pure functions over a CurriculumNode tree. Every search is a depth-first,
pre-order descent with children visited in list order, so results are stable
across calls. Lookups return None or an empty list when nothing matches.
"""

from typing import Optional

from learning.models.curriculum import CurriculumNode, NodeStatus


def find_by_id(tree: CurriculumNode, node_id: str) -> Optional[CurriculumNode]:
    """Return the first pre-order node with the given id, or None."""
    if tree.id == node_id:
        return tree

    for child in tree.children:
        found = find_by_id(child, node_id)
        if found is not None:
            return found

    return None


def path_to_node(tree: CurriculumNode, node_id: str) -> list[CurriculumNode]:
    """Return the nodes from the root down to the target (inclusive), or []."""
    path: list[CurriculumNode] = []

    def search(node: CurriculumNode) -> bool:
        path.append(node)
        if node.id == node_id:
            return True
        for child in node.children:
            if search(child):
                return True
        path.pop()
        return False

    search(tree)
    return path


def ancestors_of(tree: CurriculumNode, node_id: str) -> list[CurriculumNode]:
    """Root-to-parent ancestors of a node. Empty for the root or an unknown id."""
    return path_to_node(tree, node_id)[:-1]


def siblings_of(node: CurriculumNode, tree: CurriculumNode) -> list[CurriculumNode]:
    """Children of the node's parent, excluding the node itself."""
    if node.is_root:
        return []

    parent = find_by_id(tree, node.parent_id)
    if parent is None:
        return []

    return [sibling for sibling in parent.children if sibling.id != node.id]


def flatten(tree: CurriculumNode) -> list[CurriculumNode]:
    """All nodes in pre-order: root, then each child's whole subtree in turn."""
    nodes = [tree]
    for child in tree.children:
        nodes.extend(flatten(child))
    return nodes


def count_nodes(tree: CurriculumNode) -> int:
    return 1 + sum(count_nodes(child) for child in tree.children)


def update_status(tree: CurriculumNode, node_id: str, status: NodeStatus) -> CurriculumNode:
    """
    Return a new tree with one node's status replaced.

    The root-to-target path is rebuilt and every other subtree is deep-copied,
    so the result shares no mutable nodes or lists with the input. An unknown
    id returns an equal copy of the input.
    """
    path = path_to_node(tree, node_id)
    if not path:
        return tree.model_copy(deep=True)

    rebuilt = path[-1].model_copy(update={"status": status}, deep=True)
    for parent, child in zip(reversed(path[:-1]), reversed(path[1:])):
        children = [rebuilt if c is child else c.model_copy(deep=True) for c in parent.children]
        rebuilt = parent.model_copy(update={"children": children})

    return rebuilt
