"""Versioned envelopes for everything written to the durable store."""

from pydantic import BaseModel

from pathlike.domain.ledger import PendingSubmission
from pathlike.domain.likes import BrowseHistoryEntry, LikeRecord

SCHEMA_VERSION = 1

LIKES_KEY = "likes"
BROWSE_HISTORY_KEY = "browse_history"
PENDING_SUBMISSIONS_KEY = "pending_submissions"


class LikesDocument(BaseModel):
    version: int = SCHEMA_VERSION
    likes: list[LikeRecord] = []


class BrowseHistoryDocument(BaseModel):
    version: int = SCHEMA_VERSION
    entries: list[BrowseHistoryEntry] = []


class PendingSubmissionsDocument(BaseModel):
    version: int = SCHEMA_VERSION
    pending: list[PendingSubmission] = []
