#!/usr/bin/env python3
"""Realign question upvote counters with the vote ledger.

Usage:
    python scripts/reconcile_votes.py                # every question
    python scripts/reconcile_votes.py <question_id>  # one question
"""

import argparse
import asyncio
import sys

import logfire
from dishka import AsyncContainer

from homework.application.usecase.vote import (
    ReconcileVotesRequest,
    ReconcileVotesResponse,
    ReconcileVotesUseCase,
)
from homework.config import Settings
from homework.util.di.container import create_script_container
from homework.util.logging import setup_logging
from homework.util.observability import configure_logfire


async def run_batch(
    container: AsyncContainer, request: ReconcileVotesRequest
) -> ReconcileVotesResponse:
    """Reconcile one batch in its own request scope, committed on exit.

    Row locks taken by the batch are released at that commit, so votes on
    the batch's questions only wait for one batch, not the whole run.
    """
    async with container() as request_container:
        use_case = await request_container.get(ReconcileVotesUseCase)
        return await use_case.execute(request)


async def reconcile(question_id: str | None, batch_size: int) -> int:
    """Run reconciliation, committing after each batch."""
    container = create_script_container()
    checked = 0
    repaired = 0
    try:
        if question_id:
            result = await run_batch(
                container, ReconcileVotesRequest(question_id=question_id)
            )
            checked, repaired = result.checked, result.repaired
        else:
            page = 1
            while True:
                result = await run_batch(
                    container,
                    ReconcileVotesRequest(page=page, batch_size=batch_size),
                )
                checked += result.checked
                repaired += result.repaired
                if not result.has_more:
                    break
                page += 1
    finally:
        await container.close()

    logfire.info("Vote reconciliation finished", checked=checked, repaired=repaired)
    print(f"Checked {checked} question(s), repaired {repaired}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("question_id", nargs="?", help="Reconcile only this question")
    parser.add_argument("--batch-size", type=int, default=100)
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        return asyncio.run(reconcile(args.question_id, args.batch_size))
    except Exception as e:
        logfire.error(
            "Vote reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
