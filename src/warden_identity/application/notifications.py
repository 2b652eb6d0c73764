"""Detached delivery of notification emails.

Signup and reset requests must not wait for, or fail because of, email
delivery. ``NotificationDispatcher`` runs each delivery as its own
asyncio task and keeps a reference until it finishes.
"""

import asyncio
import logging

from warden_identity.application.ports import EmailMessage, Mailer

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Fire-and-forget front of a ``Mailer``."""

    def __init__(self, mailer: Mailer):
        self._mailer = mailer
        self._background_tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._background_tasks)

    def dispatch(self, message: EmailMessage) -> asyncio.Task:
        """Schedule delivery of ``message`` without waiting for it.

        Must be called from a running event loop. Delivery errors are
        logged and never reach the caller.
        """
        logger.debug(
            "Dispatching %s email to %s (fire-and-forget)",
            message.template.name,
            message.to,
        )
        task = asyncio.create_task(self._deliver(message))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until every dispatched delivery has finished."""
        while self._background_tasks:
            await asyncio.gather(*self._background_tasks)

    async def _deliver(self, message: EmailMessage) -> None:
        try:
            await self._mailer.send(message)
            logger.debug("Email %s sent to %s", message.template.name, message.to)
        except Exception as e:
            logger.warning(
                "Fire-and-forget %s email to %s failed: %s",
                message.template.name,
                message.to,
                e,
            )
