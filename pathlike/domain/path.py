"""Traversal path helpers."""

NodeId = str


def squash_path(path: list[NodeId]) -> list[NodeId]:
    """Remove loops from a path, keeping only the most recent visit to each node.

    Walks the path once with a stack of kept nodes and an index of their stack positions.
    Returning to a node already on the stack truncates the stack back to that node,
    e.g. ``[A, B, C, B, D] -> [A, B, D]``.

    Args:
        path: Node IDs in visit order

    Returns:
        Loop-free path with no repeated node IDs
    """
    stack: list[NodeId] = []
    index: dict[NodeId, int] = {}

    for node_id in path:
        if node_id in index:
            position = index[node_id]
            while len(stack) - 1 > position:
                del index[stack.pop()]
        else:
            index[node_id] = len(stack)
            stack.append(node_id)

    return stack
