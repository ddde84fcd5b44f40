"""CLI for printing like statistics and queue state from a local store file"""

import argparse
import json
import sys
from typing import Any

from loguru import logger

from pathlike.config import settings
from pathlike.domain.ledger import SignerIdentity
from pathlike.errors import SignerUnavailable
from pathlike.session import create_session
from pathlike.signers.session import SessionSigner
from pathlike.storage.local import LocalKeyValueStore


async def offline_transactor(identity: SignerIdentity, actions: list[dict]) -> dict:
    raise SignerUnavailable("Reports never submit to the ledger")


def main(store_path: str) -> dict[str, Any]:
    store = LocalKeyValueStore(filepath=store_path)
    session = create_session(store=store, signer=SessionSigner(offline_transactor))

    tracker = session.tracker
    return {
        "statistics": tracker.get_statistics().model_dump(),
        "browse_history_entries": len(tracker.get_browse_history()),
        "pending_submissions": session.submissions.get_pending_count(),
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--store",
        type=str,
        required=False,
        help="Local key-value store file",
        default=settings.local_store_path,
    )
    args = parser.parse_args()

    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])
    print(json.dumps(main(store_path=args.store), indent=2))
