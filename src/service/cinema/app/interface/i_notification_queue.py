from abc import ABC, abstractmethod

from src.service.cinema.app.dto.notification_job import NotificationJob


class INotificationQueue(ABC):
    @abstractmethod
    async def submit(self, job: NotificationJob) -> None:
        """
        Waits while the queue is full.

        Raises:
            NotificationError: the pool has been shut down
        """
        pass
