"""Submission Coordinator — hands a PaymentRecord to the ACH service and checks it.

Invariants:
    - create -> build (contents) -> validate, in that order
    - A build failure is logged and ignored; a create or validate failure raises
      AchServiceError and no file id is returned
    - A file that fails validation is discarded before the error is raised
    - discard() never raises; callers also use it to compensate aborted batches
"""

import logging

from paygate.core.errors import AchServiceError
from paygate.core.payment_record import PaymentRecord
from paygate.core.repository_protocols import FileService

logger = logging.getLogger(__name__)


class SubmissionCoordinator:
    def __init__(self, ach: FileService):
        self.ach = ach

    async def submit(
        self, record: PaymentRecord, idempotency_key: str, user_id: str,
    ) -> str:
        """Create, build and validate the file. Returns the ACH file id."""
        file_id = await self.ach.create_file(idempotency_key, record, user_id)
        extra = {"file_id": file_id, "user_id": user_id, "transfer_id": record.id}

        try:
            await self.ach.get_file_contents(file_id, user_id)
        except AchServiceError as e:
            logger.warning(f"Building ACH file failed: {e.message}", extra=extra)

        try:
            await self.ach.validate_file(file_id, user_id)
        except AchServiceError as e:
            logger.error(f"ACH file rejected: {e.message}", extra=extra)
            await self.discard(file_id, user_id)
            raise
        return file_id

    async def discard(self, file_id: str, user_id: str) -> None:
        """Best-effort delete of a file that will not be kept."""
        try:
            await self.ach.delete_file(file_id, user_id)
        except AchServiceError as e:
            logger.warning(
                f"Unable to discard ACH file: {e.message}",
                extra={"file_id": file_id, "user_id": user_id},
            )
