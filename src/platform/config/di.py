"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.metrics.reservation_metrics import NotificationTally, metrics
from src.platform.types.clock import utc_now
from src.service.cinema.driven_adapter.notification.console_notification_sender import (
    ConsoleNotificationSender,
)
from src.service.cinema.driven_adapter.notification.notification_worker_pool import (
    NotificationWorkerPool,
)
from src.service.cinema.driven_adapter.notification.qr_renderer_impl import QrCodeRenderer
from src.service.cinema.driven_adapter.notification.smtp_notification_sender import (
    SmtpNotificationSender,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine + session factory; units of work are built per request)
    database = providers.Singleton(Database)

    # "now" for every expiry and window decision; tests swap in a movable clock
    clock = providers.Object(utc_now)

    # Metrics
    metrics = providers.Object(metrics)
    notification_tally = providers.Singleton(NotificationTally, metrics=metrics)

    # Notification delivery
    qr_renderer = providers.Singleton(QrCodeRenderer, size_px=256)
    notification_sender = providers.Selector(
        config_service.provided.NOTIFICATION_BACKEND,
        smtp=providers.Singleton(
            SmtpNotificationSender,
            host=config_service.provided.SMTP_HOST,
            port=config_service.provided.SMTP_PORT,
            username=config_service.provided.SMTP_USERNAME,
            password=config_service.provided.SMTP_PASSWORD.get_secret_value.call(),
            sender=config_service.provided.SMTP_SENDER,
            use_tls=config_service.provided.SMTP_USE_TLS,
            timeout=config_service.provided.SMTP_TIMEOUT_SECONDS,
        ),
        console=providers.Singleton(ConsoleNotificationSender, debug=True),
    )

    # Background notification workers (run inside the main.py lifespan task group)
    notification_pool = providers.Singleton(
        NotificationWorkerPool,
        sender=notification_sender,
        qr_renderer=qr_renderer,
        tally=notification_tally,
        worker_count=config_service.provided.NOTIFICATION_WORKER_COUNT,
        queue_size=config_service.provided.NOTIFICATION_QUEUE_SIZE,
        drain_timeout=config_service.provided.NOTIFICATION_DRAIN_TIMEOUT_SECONDS,
        base_url=config_service.provided.BASE_URL,
        timezone_name=config_service.provided.DISPLAY_TIMEZONE,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
