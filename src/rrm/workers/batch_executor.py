# Filename: batch_executor.py
# Author: Rich Lewis @RichLewis007
# Description: Runs the trash relocator over many operands. Items run on a thread pool, or one
#              at a time in interactive mode, and a failing item never stops its siblings.

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from rrm.services.errors import TrashError
from rrm.services.relocator import (
    RelocationOptions,
    RelocationRequest,
    RelocationResult,
    TrashRelocator,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BatchFailure:
    # One operand that could not be processed.

    source: str
    message: str
    error: Exception


@dataclass(slots=True)
class BatchResult:
    # Summary of a batch, split into successes and failures (both in input order).

    succeeded: list[RelocationResult] = field(default_factory=list)
    failed: list[BatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


ErrorCallback = Callable[[BatchFailure], None]


def _run_one(
    relocator: TrashRelocator,
    source: str,
    options: RelocationOptions,
    on_error: ErrorCallback | None,
) -> RelocationResult | BatchFailure:
    try:
        return relocator.relocate(RelocationRequest(source=source, options=options))
    except (TrashError, OSError) as exc:
        failure = BatchFailure(source=source, message=str(exc), error=exc)
        logger.info("Failed to trash %s: %s", source, exc)
        if on_error is not None:
            on_error(failure)
        return failure


def run_batch(
    sources: Sequence[str],
    options: RelocationOptions,
    relocator: TrashRelocator,
    *,
    max_workers: int | None = None,
    on_error: ErrorCallback | None = None,
) -> BatchResult:
    """Relocate every source and collect the outcome of each.

    Interactive runs are sequential in input order so prompts never
    interleave. Otherwise each source is its own task on a thread pool of
    ``max_workers`` threads (the executor's default when ``None``).
    """
    outcomes: list[RelocationResult | BatchFailure]
    if options.interactive or len(sources) <= 1 or max_workers == 1:
        outcomes = [_run_one(relocator, source, options, on_error) for source in sources]
    else:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="rrm") as pool:
            futures = [
                pool.submit(_run_one, relocator, source, options, on_error)
                for source in sources
            ]
            outcomes = [future.result() for future in futures]

    result = BatchResult()
    for outcome in outcomes:
        if isinstance(outcome, BatchFailure):
            result.failed.append(outcome)
        else:
            result.succeeded.append(outcome)
    logger.debug(
        "Batch finished: %d succeeded, %d failed",
        len(result.succeeded),
        len(result.failed),
    )
    return result


__all__ = ["BatchFailure", "BatchResult", "run_batch"]
