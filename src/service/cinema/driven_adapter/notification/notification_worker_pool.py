"""
Notification Worker Pool - bounded queue drained by a fixed set of worker tasks

Architecture:
- Producers (payment callback, verification flow) call submit(); it waits while the
  queue is full
- N workers share one anyio memory object stream inside one task group
- Each job is rendered and delivered by exactly one worker; a failure is logged and
  counted, never retried

Shutdown (drain-then-stop):
1. shutdown() closes the send side; later submits raise NotificationError
2. Workers keep consuming what is buffered and exit when the stream is exhausted
3. shutdown() waits for every worker, at most drain_timeout seconds; whatever is
   still running after that is cancelled
"""

from typing import List, Optional

import anyio
import anyio.to_thread
from anyio.abc import TaskStatus
from anyio.streams.memory import MemoryObjectReceiveStream

from src.platform.exception.exceptions import NotificationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import NotificationTally
from src.service.cinema.app.dto.notification_job import (
    Attachment,
    NotificationJob,
    TicketBundleJob,
    VerificationCodeJob,
)
from src.service.cinema.app.interface.i_notification_queue import INotificationQueue
from src.service.cinema.app.interface.i_notification_sender import INotificationSender
from src.service.cinema.app.interface.i_qr_renderer import IQrRenderer
from src.service.cinema.driven_adapter.notification.email_template import (
    TICKET_SUBJECT,
    VERIFICATION_SUBJECT,
    render_ticket_email,
    render_verification_email,
    ticket_verify_url,
)


class NotificationWorkerPool(INotificationQueue):
    def __init__(
        self,
        *,
        sender: INotificationSender,
        qr_renderer: IQrRenderer,
        tally: NotificationTally,
        worker_count: int,
        queue_size: int,
        drain_timeout: float,
        base_url: str,
        timezone_name: str = 'UTC',
    ) -> None:
        if worker_count < 1:
            raise ValueError('worker_count must be at least 1')

        self.sender = sender
        self.qr_renderer = qr_renderer
        self.tally = tally
        self.worker_count = worker_count
        self.drain_timeout = drain_timeout
        self.base_url = base_url
        self.timezone_name = timezone_name

        self._send_stream, self._receive_stream = anyio.create_memory_object_stream[
            NotificationJob
        ](max_buffer_size=queue_size)
        self._cancel_scope: Optional[anyio.CancelScope] = None
        self._stopped: Optional[anyio.Event] = None

    # ========== Producer side ==========

    async def submit(self, job: NotificationJob) -> None:
        try:
            await self._send_stream.send(job)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError) as e:
            raise NotificationError('notification pool is shut down') from e

    # ========== Lifecycle ==========

    async def run(self, *, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED) -> None:
        """Run the workers until shutdown() has drained the queue. Use with TaskGroup.start()."""
        if self._stopped is not None:
            raise RuntimeError('notification pool is already running')
        self._stopped = anyio.Event()

        try:
            with anyio.CancelScope() as self._cancel_scope:
                async with anyio.create_task_group() as tg:
                    for worker_id in range(1, self.worker_count + 1):
                        tg.start_soon(self._worker, worker_id, self._receive_stream.clone())
                    # Workers hold their own clones; the stream ends once all of them close
                    self._receive_stream.close()
                    Logger.base.info(f'👷 [NOTIFY] Started {self.worker_count} workers')
                    task_status.started()
        finally:
            self._stopped.set()
            Logger.base.info('🛑 [NOTIFY] All workers stopped')

    async def shutdown(self) -> None:
        self._send_stream.close()
        if self._stopped is None:
            # Never started: nothing will drain the buffer
            self._receive_stream.close()
            return
        stopped = self._stopped

        with anyio.move_on_after(self.drain_timeout) as scope:
            await stopped.wait()

        if scope.cancelled_caught:
            Logger.base.warning(
                f'⏱️ [NOTIFY] Drain exceeded {self.drain_timeout}s, cancelling remaining jobs'
            )
            if self._cancel_scope is not None:
                self._cancel_scope.cancel()
            await stopped.wait()

    # ========== Worker side ==========

    async def _worker(
        self, worker_id: int, receive_stream: MemoryObjectReceiveStream[NotificationJob]
    ) -> None:
        async with receive_stream:
            async for job in receive_stream:
                await self._process(worker_id, job)
        Logger.base.info(f'👷 [NOTIFY-{worker_id}] Queue closed, worker exiting')

    async def _process(self, worker_id: int, job: NotificationJob) -> None:
        try:
            if isinstance(job, TicketBundleJob):
                sent = await self._send_ticket_bundle(job)
            else:
                sent = await self._send_verification_code(job)
        except Exception as e:
            # One bad job must not take its worker down
            Logger.base.error(f'❌ [NOTIFY-{worker_id}] {job.kind} failed: {type(e).__name__}: {e}')
            self.tally.failed(kind=job.kind)
            return

        if sent:
            self.tally.sent(kind=job.kind)
        else:
            Logger.base.error(f'❌ [NOTIFY-{worker_id}] {job.kind} rejected by sender')
            self.tally.failed(kind=job.kind)

    async def _render_attachments(self, job: TicketBundleJob) -> List[Attachment]:
        attachments: List[Attachment] = []
        for line in job.tickets:
            url = ticket_verify_url(self.base_url, line.qr_token)
            try:
                png = await anyio.to_thread.run_sync(self.qr_renderer.render, url)
            except Exception as e:
                Logger.base.error(
                    f'❌ [NOTIFY] QR render failed for ticket {line.ticket_id}, skipping: {e}'
                )
                continue
            attachments.append(
                Attachment(
                    filename=f'ticket-{job.booking_id}-{line.seat_code}.png',
                    content=png,
                    content_id=f'ticket-{line.ticket_id}',
                )
            )
        return attachments

    async def _send_ticket_bundle(self, job: TicketBundleJob) -> bool:
        attachments = await self._render_attachments(job)
        return await self.sender.send(
            to=job.recipient_email,
            subject=TICKET_SUBJECT,
            html_body=render_ticket_email(job, timezone_name=self.timezone_name),
            attachments=attachments,
        )

    async def _send_verification_code(self, job: VerificationCodeJob) -> bool:
        return await self.sender.send(
            to=job.recipient_email,
            subject=VERIFICATION_SUBJECT,
            html_body=render_verification_email(job),
            attachments=[],
        )
