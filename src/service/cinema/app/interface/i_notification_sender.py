from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.app.dto.notification_job import Attachment


class INotificationSender(ABC):
    @abstractmethod
    async def send(
        self,
        *,
        to: str,
        subject: str,
        html_body: str,
        attachments: List[Attachment],
    ) -> bool:
        """
        Raises:
            NotificationError: delivery was rejected or the transport failed
        """
        pass
