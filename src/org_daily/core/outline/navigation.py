"""Tree navigation over a flat record list: children and subtrees."""

from org_daily.models.outline import Document, OutlineNode


def build_tree(document: Document) -> list[OutlineNode]:
    """Nest records by level.

    A record is a child of the nearest preceding record with a smaller level.
    Records skipping levels (``*`` followed by ``***``) nest under the nearest
    shallower record all the same.
    """
    records = document.records

    def build(start: int, parent_level: int) -> tuple[list[OutlineNode], int]:
        nodes: list[OutlineNode] = []
        i = start
        while i < len(records) and records[i].level > parent_level:
            children, nxt = build(i + 1, records[i].level)
            nodes.append(OutlineNode(index=i, record=records[i], children=tuple(children)))
            i = nxt
        return nodes, i

    roots, _ = build(0, 0)
    return roots


def subtree_end(document: Document, index: int) -> int:
    """Index one past the last descendant of the record at index."""
    level = document.records[index].level
    i = index + 1
    while i < len(document.records) and document.records[i].level > level:
        i += 1
    return i

