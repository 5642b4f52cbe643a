"""Remove dead nodes from a tree.

A node is kept when it is alive, when one of its descendants is alive, or
when one of its ancestors is alive. Everything else is detached from its
parent. The root is never detached; both functions return whether it would
have survived.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False, slots=True)
class TreeNode:
    id: int
    parent_id: int | None
    alive: bool
    children: list[TreeNode] = field(default_factory=list)

    def add_child(self, alive: bool) -> TreeNode:
        """Append a child numbered after its last sibling (or `id * 10 + 1`)."""

        base = self.children[-1].id if self.children else self.id * 10
        child = TreeNode(id=base + 1, parent_id=self.id, alive=alive)
        self.children.append(child)
        return child


def prune(root: TreeNode) -> bool:
    """Recursive post-order mark-and-sweep."""

    return _sweep(root, protected=False)


def _sweep(node: TreeNode, *, protected: bool) -> bool:
    protected = protected or node.alive
    node.children[:] = [c for c in node.children if _sweep(c, protected=protected)]
    return protected or bool(node.children)


def prune_iterative(root: TreeNode) -> bool:
    """Same result as `prune`, using an explicit stack instead of recursion."""

    keep: dict[int, bool] = {}
    stack: list[tuple[TreeNode, bool, bool]] = [(root, False, False)]

    while stack:
        node, protected, expanded = stack.pop()
        protected = protected or node.alive
        if not expanded:
            # Revisit after all children are decided.
            stack.append((node, protected, True))
            for child in node.children:
                stack.append((child, protected, False))
            continue

        node.children[:] = [c for c in node.children if keep.pop(id(c))]
        keep[id(node)] = protected or bool(node.children)

    return keep[id(root)]


def render(node: TreeNode, depth: int = 0) -> str:
    """Render a tree one node per line as ``<dashes><T|F><id>``."""

    lines: list[str] = []
    stack = [(node, depth)]
    while stack:
        cur, level = stack.pop()
        lines.append(f"{'-' * level}{'T' if cur.alive else 'F'}{cur.id}")
        stack.extend((c, level + 1) for c in reversed(cur.children))
    return "\n".join(lines)
