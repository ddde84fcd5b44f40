"""Like and browse history domain models."""

from typing import Any

from pydantic import BaseModel


class BrowseHistoryEntry(BaseModel):
    """A single visit shown in the browse history, newest first."""

    node_id: str
    display_name: str = "Unknown"
    node_type: str = "unknown"
    visited_at_ms: int


class LikeMetadata(BaseModel):
    """Metadata attached to a like. Free-form fields beyond type and name are kept."""

    type: str = "unknown"
    name: str = "unknown"

    model_config = {"extra": "allow"}


class LikeRecord(BaseModel):
    """Represents a liked node together with the path that led to it.

    Attributes:
        node_id: The liked node
        path: Raw traversal path at like time
        squashed_path: The same path with loops removed
        start_node: Node the traversal started from
        liked_at_ms: Like timestamp (milliseconds since epoch)
        metadata: Node type, name and any other fields supplied by the renderer
    """

    node_id: str
    path: list[str]
    squashed_path: list[str]
    start_node: str | None = None
    liked_at_ms: int
    metadata: LikeMetadata = LikeMetadata()

    def to_ledger_export(self) -> dict[str, Any]:
        return {
            "node_id": self.node_id,
            "node_path": list(self.path),
            "liked_at_ms": self.liked_at_ms,
            "metadata": self.metadata.model_dump(),
        }


class EdgeWeight(BaseModel):
    """A directed edge and the number of liked traversals that crossed it."""

    source: str
    target: str
    weight: int


class PathStatistics(BaseModel):
    """Aggregate statistics over all liked paths."""

    total_likes: int
    avg_path_length: float
    total_edges_traversed: int  # number of distinct directed edge keys
    most_traveled_edge: EdgeWeight | None = None
    likes_by_type: dict[str, int] = {}
