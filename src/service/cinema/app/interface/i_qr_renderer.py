from abc import ABC, abstractmethod


class IQrRenderer(ABC):
    @abstractmethod
    def render(self, payload: str) -> bytes:
        """PNG bytes. Blocking; callers run it off the event loop."""
        pass
