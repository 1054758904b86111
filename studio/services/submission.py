"""Validate-then-persist orchestration for drafts."""

from typing import Any

from studio.config.base import EntityKind
from studio.core.exceptions import SubmissionRejectedError
from studio.core.logging import get_logger
from studio.infrastructure.console_api import AssetSlot, ConsoleAPIClient
from studio.services.draft import EntityDraft

logger = get_logger(__name__)


class SubmissionService:
    """Submit drafts to the REST service.

    A draft with any validation error is never sent. Valid drafts are
    pruned of inactive fields and created or updated depending on whether
    they already carry an id.

    Example:
        >>> service = SubmissionService(api)
        >>> draft = await service.open(EntityKind.CHANNEL, 3)
        >>> draft.set("videos_max", 4)
        >>> saved = await service.submit(draft)
    """

    def __init__(self, api: ConsoleAPIClient) -> None:
        self.api = api

    async def open(self, kind: EntityKind, record_id: int) -> EntityDraft:
        """Load a stored record into a new draft.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        record = await self.api.get_record(kind, record_id)
        return EntityDraft.from_record(kind, record)

    async def submit(self, draft: EntityDraft) -> dict[str, Any]:
        """Validate a draft and persist it.

        Args:
            draft: Draft to submit

        Returns:
            The record as stored by the service (wire format)

        Raises:
            SubmissionRejectedError: If the draft has validation errors
            TransientServiceError: If the service is unreachable or failing
            ExternalAPIError: If the service rejects the request
        """
        report = draft.validate()
        if not report.is_valid:
            logger.info(
                "Submission rejected",
                kind=draft.kind.value,
                record_id=draft.record_id,
                error_count=len(report.errors),
            )
            raise SubmissionRejectedError(report)

        payload = draft.payload()
        if draft.is_new:
            saved = await self.api.create_record(draft.kind, payload)
        else:
            saved = await self.api.update_record(draft.kind, draft.record_id, payload)

        if isinstance(saved.get("id"), int):
            draft.set("id", saved["id"])
        return saved

    async def upload(
        self,
        draft: EntityDraft,
        slot: AssetSlot,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Upload an asset and record it on a channel draft.

        The draft is only changed once the upload succeeded.

        Raises:
            ValueError: If the draft is not a channel
            UploadError: If the upload fails
        """
        if draft.kind is not EntityKind.CHANNEL:
            raise ValueError(f"Uploads belong to channels, not {draft.kind.value}")

        result = await self.api.upload_asset(slot, filename, content, content_type)
        draft.record_upload(slot, result)

    async def delete(self, kind: EntityKind, record_id: int) -> None:
        await self.api.delete_record(kind, record_id)


__all__ = ["SubmissionService"]
