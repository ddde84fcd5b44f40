"""Ledger action, receipt and submission result models."""

from typing import Any

from pydantic import BaseModel


class SignerIdentity(BaseModel):
    """Account and permission the signer authorizes actions with."""

    actor: str
    permission: str = "active"


class LikeActionData(BaseModel):
    account: str
    node_id: str
    node_path: list[str]


class LedgerAction(BaseModel):
    """A single smart-contract action submitted through the signer."""

    account: str
    name: str
    authorization: list[SignerIdentity]
    data: LikeActionData


class LedgerReceipt(BaseModel):
    """What the signer returns for an accepted transaction."""

    transaction_id: str | None = None
    raw: dict[str, Any] = {}


class PendingSubmission(BaseModel):
    """A like waiting for a signer to become available."""

    node_id: str
    truncated_path: list[str]
    queued_at_ms: int


class SubmissionResult(BaseModel):
    """Outcome of submitting (or deferring) one like to the ledger."""

    success: bool
    node_id: str
    transaction_id: str | None = None
    error: str | None = None
    deferred: bool = False


class LikeResult(BaseModel):
    """Outcome of a like or unlike request.

    ``success`` reflects the local state change only. The ledger outcome, when a submission
    was attempted, is reported in ``submission``.
    """

    success: bool
    liked: bool
    node_id: str
    path: list[str] = []
    queued: bool = False
    submission: SubmissionResult | None = None
