from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from ..core.constants import NOTIFICATION_WORKERS
from .gateway import NotificationGateway, NotificationResult

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Fire-and-forget delivery on a background executor.

    `dispatch` never raises: gateway exceptions become a failed
    NotificationResult on the returned future and a warning in the log.
    """

    def __init__(self, gateway: NotificationGateway, *, executor: Optional[Executor] = None):
        self._gateway = gateway
        self._executor = executor or ThreadPoolExecutor(
            max_workers=NOTIFICATION_WORKERS, thread_name_prefix="notify"
        )

    def _deliver(self, to_address: str, subject: str, body: str) -> NotificationResult:
        try:
            result = self._gateway.send(to_address, subject, body)
        except Exception as exc:
            result = NotificationResult(to_address, subject, success=False, error=str(exc))

        if not result.success:
            logger.warning("Notification to %s failed: %s", to_address, result.error)
        return result

    def dispatch(self, to_address: str, subject: str, body: str) -> Future:
        try:
            return self._executor.submit(self._deliver, to_address, subject, body)
        except RuntimeError as exc:
            # Executor already shut down.
            logger.warning("Notification to %s not queued: %s", to_address, exc)
            future: Future = Future()
            future.set_result(NotificationResult(to_address, subject, success=False, error=str(exc)))
            return future

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
