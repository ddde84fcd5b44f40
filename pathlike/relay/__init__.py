"""Ledger relay for liked paths."""

from pathlike.relay.submission_queue import SubmissionQueue

__all__ = [
    "SubmissionQueue",
]
