"""
Update submission.

`UpdateSubmitter.submit` sends a change set to the record store with the
acting user's identity. An empty change set never reaches the store.
"""

import asyncio
import time
from collections.abc import Mapping
from typing import Any

import psycopg

from lead_editor.core.models import SubmitFailure, SubmitNoOp, SubmitResult, SubmitSuccess
from lead_editor.errors import StoreError
from lead_editor.observability import metrics
from lead_editor.observability.logger import get_logger
from lead_editor.store import RecordStore, TTLCache

logger = get_logger(__name__)


class UpdateSubmitter:
    """
    Submits change sets to a RecordStore.

    The store call is blocking and runs in a worker thread. On success every
    cached read of the record is evicted. Failures are returned, not raised,
    and are never retried.
    """

    def __init__(self, store: RecordStore, cache: TTLCache | None = None):
        self.store = store
        self.cache = cache

    async def submit(
        self,
        entity_type: str,
        record_id: str,
        changes: Mapping[str, Any],
        actor: str,
    ) -> SubmitResult:
        """
        Submit a change set.

        Args:
            entity_type: room, room_type or property
            record_id: Record to update
            changes: Output of compute_changes (possibly reconciled)
            actor: Identity of the editor

        Returns:
            SubmitNoOp for an empty change set, SubmitSuccess with the applied
            fields, or SubmitFailure with the store's message
        """
        record_id = str(record_id)

        if not changes:
            metrics.record_submission(entity_type, "noop")
            logger.debug(
                "No changes to submit",
                extra={"entity_type": entity_type, "record_id": record_id}
            )
            return SubmitNoOp(record_id=record_id)

        payload = dict(changes)
        start = time.perf_counter()
        try:
            applied = await asyncio.to_thread(self.store.put, entity_type, record_id, payload, actor)
        except (StoreError, psycopg.DatabaseError) as e:
            metrics.record_submission(entity_type, "failure", len(payload))
            logger.error(
                f"Submission failed: {e}",
                extra={
                    "entity_type": entity_type,
                    "record_id": record_id,
                    "fields": list(payload),
                    "changed_by": actor,
                }
            )
            return SubmitFailure(record_id=record_id, reason=str(e))
        finally:
            metrics.observe_histogram(
                metrics.submit_duration_seconds, time.perf_counter() - start, entity_type=entity_type
            )

        if self.cache is not None:
            self.cache.invalidate_record(entity_type, record_id)

        metrics.record_submission(entity_type, "success", len(payload))
        logger.info(
            f"Submitted {len(payload)} field(s)",
            extra={
                "entity_type": entity_type,
                "record_id": record_id,
                "fields": list(payload),
                "changed_by": actor,
            }
        )
        return SubmitSuccess(record_id=record_id, applied_fields=applied)
