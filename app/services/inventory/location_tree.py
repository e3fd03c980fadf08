"""
Flat location list -> rooted forest.

Pure functions, no I/O. A node whose parent is not part of the input (partial
or filtered loads) becomes a root instead of being dropped.
"""

from typing import Iterable, List

from app.schemas.inventory.location_schemas import LocationOut, LocationTreeNode


def _sort_key(tree_node: LocationTreeNode):
    return (tree_node.location.code, tree_node.location.id)


def build_tree(nodes: Iterable[LocationOut]) -> List[LocationTreeNode]:
    by_id = {}
    for node in nodes:
        by_id[node.id] = LocationTreeNode(location=node, children=[])

    roots: List[LocationTreeNode] = []
    for tree_node in by_id.values():
        parent_id = tree_node.location.parent_id
        if parent_id and parent_id != tree_node.location.id and parent_id in by_id:
            by_id[parent_id].children.append(tree_node)
        else:
            roots.append(tree_node)

    roots.sort(key=_sort_key)
    stack = list(roots)
    while stack:
        current = stack.pop()
        current.children.sort(key=_sort_key)
        stack.extend(current.children)

    return roots


def flatten_tree(forest: List[LocationTreeNode]) -> List[LocationOut]:
    """Depth-first, pre-order."""
    ordered: List[LocationOut] = []
    stack = list(reversed(forest))
    while stack:
        current = stack.pop()
        ordered.append(current.location)
        stack.extend(reversed(current.children))
    return ordered


def render_tree(forest: List[LocationTreeNode], indent: str = "  ") -> str:
    lines: List[str] = []
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        current, level = stack.pop()
        location = current.location
        line = f"{indent * level}{location.code} ({location.path})"
        if not location.is_active:
            line += " [inactive]"
        lines.append(line)
        stack.extend((child, level + 1) for child in reversed(current.children))
    return "\n".join(lines)
