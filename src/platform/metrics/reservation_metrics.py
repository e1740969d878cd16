import threading

from prometheus_client import Counter, Histogram


class ReservationMetrics:
    """
    Reservation core metrics collector

    Tracks booking attempts, payment callbacks and notification delivery.
    Exposed on /metrics by the app factory.
    """

    def __init__(self) -> None:
        # ========== Booking Metrics ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total booking requests',
            ['result'],  # result: created/conflict/closed/not_found/invalid/error
        )

        self.booking_duration = Histogram(
            'booking_duration_seconds',
            'Booking transaction duration',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Payment Metrics ==========
        self.payment_callbacks = Counter(
            'payment_callbacks_total',
            'Payment provider callbacks',
            ['status', 'result'],  # result: applied/duplicate
        )

        # ========== Notification Metrics ==========
        self.notification_jobs = Counter(
            'notification_jobs_total',
            'Notification jobs processed by the worker pool',
            ['kind', 'result'],  # result: sent/failed
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float) -> None:
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.observe(duration)

    def record_payment_callback(self, *, status: str, applied: bool) -> None:
        self.payment_callbacks.labels(
            status=status, result='applied' if applied else 'duplicate'
        ).inc()

    def record_notification(self, *, kind: str, sent: bool) -> None:
        self.notification_jobs.labels(kind=kind, result='sent' if sent else 'failed').inc()


class NotificationTally:
    """
    Sent/failed counts shared by every notification worker.

    Guarded by a lock because QR rendering and SMTP delivery run in worker
    threads, not only on the event loop.
    """

    def __init__(self, metrics: ReservationMetrics | None = None) -> None:
        self._lock = threading.Lock()
        self._sent = 0
        self._failed = 0
        self._metrics = metrics

    def sent(self, *, kind: str) -> None:
        with self._lock:
            self._sent += 1
        if self._metrics:
            self._metrics.record_notification(kind=kind, sent=True)

    def failed(self, *, kind: str) -> None:
        with self._lock:
            self._failed += 1
        if self._metrics:
            self._metrics.record_notification(kind=kind, sent=False)

    @property
    def sent_count(self) -> int:
        with self._lock:
            return self._sent

    @property
    def failed_count(self) -> int:
        with self._lock:
            return self._failed


# Global metrics instance
metrics = ReservationMetrics()
