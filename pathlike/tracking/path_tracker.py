"""Tracks user navigation paths through the graph and the likes recorded along them.

Liked paths reinforce the edges they cross, ant-colony style: the more liked journeys
traverse an edge, the higher its weight.
"""

import time
from typing import Any, Callable

from loguru import logger

from pathlike.domain.likes import (
    BrowseHistoryEntry,
    EdgeWeight,
    LikeMetadata,
    LikeRecord,
    PathStatistics,
)
from pathlike.domain.path import NodeId, squash_path
from pathlike.storage.documents import (
    BROWSE_HISTORY_KEY,
    LIKES_KEY,
    BrowseHistoryDocument,
    LikesDocument,
)
from pathlike.storage.versioned import VersionedStore

EdgeKey = tuple[NodeId, NodeId]


def epoch_ms() -> int:
    return int(time.time() * 1000)


class PathTracker:
    """Owns the live traversal path, browse history and liked paths of one session."""

    def __init__(
        self,
        storage: VersionedStore,
        *,
        max_path_length: int = 100,
        max_browse_history: int = 200,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        """Initialize the tracker and reload likes and browse history from storage.

        Args:
            storage: Versioned durable store for likes and browse history
            max_path_length: Sliding window size of the traversal path
            max_browse_history: Maximum number of browse history entries kept
            clock: Returns the current time in milliseconds since epoch
        """
        self.storage = storage
        self.max_path_length = max_path_length
        self.max_browse_history = max_browse_history
        self._clock = clock

        self._current_path: list[NodeId] = []
        self._start_node: NodeId | None = None
        self._likes: dict[NodeId, LikeRecord] = {}
        self._browse_history: list[BrowseHistoryEntry] = []

        self._load()

    @property
    def start_node(self) -> NodeId | None:
        return self._start_node

    def set_start_node(self, node_id: NodeId) -> None:
        """Start a new traversal from the given node."""
        self._start_node = node_id
        self._current_path = [node_id]
        logger.debug(f"Path tracking started from {node_id}")

    def visit_node(self, node_id: NodeId, metadata: dict[str, Any] | None = None) -> None:
        """Record a node visit in the traversal path and the browse history.

        Args:
            node_id: Visited node ID
            metadata: Optional ``name`` and ``type`` shown in the browse history
        """
        if self._start_node is None:
            self.set_start_node(node_id)
        elif self._current_path and self._current_path[-1] == node_id:
            # Re-visiting the current node leaves the path alone
            pass
        else:
            self._current_path.append(node_id)
            if len(self._current_path) > self.max_path_length:
                del self._current_path[: len(self._current_path) - self.max_path_length]
            logger.debug(f"Path updated: {self._current_path}")

        self._record_browse_visit(node_id, metadata or {})
        self._save_browse_history()

    def get_current_path(self) -> list[NodeId]:
        return list(self._current_path)

    def get_squashed_current_path(self) -> list[NodeId]:
        return squash_path(self._current_path)

    def get_browse_history(self) -> list[BrowseHistoryEntry]:
        """Get browse history, most recent first."""
        return [entry.model_copy() for entry in self._browse_history]

    def record_like(self, node_id: NodeId, metadata: dict[str, Any] | None = None) -> LikeRecord:
        """Record a like with a snapshot of the current path.

        Liking an already liked node replaces its record with a fresh snapshot.

        Args:
            node_id: Liked node ID
            metadata: Node type, name and any other fields to keep with the like

        Returns:
            The stored like record
        """
        raw_path = self.get_current_path()
        fields = {key: value for key, value in (metadata or {}).items() if value is not None}
        for key in ("type", "name"):
            if key in fields:
                fields[key] = str(fields[key])

        record = LikeRecord(
            node_id=node_id,
            path=raw_path,
            squashed_path=squash_path(raw_path),
            start_node=self._start_node,
            liked_at_ms=self._clock(),
            metadata=LikeMetadata(**fields),
        )
        self._likes[node_id] = record
        self._save_likes()

        logger.info(f"Like recorded for {node_id} (path length {len(raw_path)})")
        return record.model_copy(deep=True)

    def is_liked(self, node_id: NodeId) -> bool:
        return node_id in self._likes

    def get_like(self, node_id: NodeId) -> LikeRecord | None:
        record = self._likes.get(node_id)
        return record.model_copy(deep=True) if record else None

    def remove_like(self, node_id: NodeId) -> bool:
        """Remove a like. Returns True if the node was liked."""
        if self._likes.pop(node_id, None) is None:
            return False

        self._save_likes()
        logger.info(f"Like removed for {node_id}")
        return True

    def get_all_likes(self) -> list[LikeRecord]:
        return [record.model_copy(deep=True) for record in self._likes.values()]

    def get_edge_weights(self) -> dict[EdgeKey, int]:
        """Derive edge weights from the raw paths of all likes.

        Every step of every liked path increments the edge in both directions, since the
        rendered graph is undirected. Repeated steps within one path each count.

        Returns:
            Mapping of (from, to) node pairs to traversal counts, in first-seen order
        """
        weights: dict[EdgeKey, int] = {}

        for record in self._likes.values():
            for source, target in zip(record.path, record.path[1:]):
                weights[(source, target)] = weights.get((source, target), 0) + 1
                weights[(target, source)] = weights.get((target, source), 0) + 1

        return weights

    def get_edge_weight(self, source: NodeId, target: NodeId) -> int:
        """Get the weight of one directed edge, 0 if no liked path crossed it."""
        return self.get_edge_weights().get((source, target), 0)

    def get_statistics(self) -> PathStatistics:
        likes = list(self._likes.values())
        weights = self.get_edge_weights()

        avg_path_length = sum(len(like.path) for like in likes) / len(likes) if likes else 0.0

        likes_by_type: dict[str, int] = {}
        for like in likes:
            likes_by_type[like.metadata.type] = likes_by_type.get(like.metadata.type, 0) + 1

        return PathStatistics(
            total_likes=len(likes),
            avg_path_length=avg_path_length,
            total_edges_traversed=len(weights),
            most_traveled_edge=self._most_traveled_edge(weights),
            likes_by_type=likes_by_type,
        )

    def export_for_ledger(self) -> list[dict[str, Any]]:
        """Export all likes in the shape used for bulk ledger submission."""
        return [record.to_ledger_export() for record in self._likes.values()]

    def clear_current_path(self) -> None:
        """Clear the current path and start node, e.g. for a new exploration session."""
        self._current_path = []
        self._start_node = None
        logger.debug("Path cleared")

    def clear_all_likes(self) -> None:
        self._likes.clear()
        self.storage.remove(LIKES_KEY)
        logger.info("All likes cleared")

    def clear_browse_history(self) -> None:
        self._browse_history = []
        self.storage.remove(BROWSE_HISTORY_KEY)
        logger.info("Browse history cleared")

    def _record_browse_visit(self, node_id: NodeId, metadata: dict[str, Any]) -> None:
        # Consecutive visits to the same node keep the first timestamp
        if self._browse_history and self._browse_history[0].node_id == node_id:
            return

        entry = BrowseHistoryEntry(
            node_id=node_id,
            display_name=str(metadata.get("name") or "Unknown"),
            node_type=str(metadata.get("type") or "unknown"),
            visited_at_ms=self._clock(),
        )
        self._browse_history.insert(0, entry)
        del self._browse_history[self.max_browse_history :]

    @staticmethod
    def _most_traveled_edge(weights: dict[EdgeKey, int]) -> EdgeWeight | None:
        best: EdgeWeight | None = None
        for (source, target), weight in weights.items():
            if best is None or weight > best.weight:
                best = EdgeWeight(source=source, target=target, weight=weight)
        return best

    def _save_likes(self) -> None:
        self.storage.save(LIKES_KEY, LikesDocument(likes=list(self._likes.values())))

    def _save_browse_history(self) -> None:
        self.storage.save(BROWSE_HISTORY_KEY, BrowseHistoryDocument(entries=self._browse_history))

    def _load(self) -> None:
        likes = self.storage.load(LIKES_KEY, LikesDocument)
        if likes is not None:
            self._likes = {record.node_id: record for record in likes.likes}
            logger.info(f"Loaded {len(self._likes)} likes from storage")

        history = self.storage.load(BROWSE_HISTORY_KEY, BrowseHistoryDocument)
        if history is not None:
            self._browse_history = history.entries[: self.max_browse_history]
            logger.info(f"Loaded {len(self._browse_history)} browse history entries from storage")
