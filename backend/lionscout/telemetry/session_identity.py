from abc import ABC, abstractmethod
from typing import Callable, Optional
import time
import uuid


class SessionIdentityProvider(ABC):
    @abstractmethod
    def get_token(self) -> str:
        """Stable token for the current browser tab"""
        pass


class TabSessionIdentity(SessionIdentityProvider):
    """Per-tab token, created on first access and only read afterwards"""

    def __init__(self, token: Optional[str] = None, clock: Callable[[], float] = time.time):
        self._token = token
        self._clock = clock

    def get_token(self) -> str:
        if self._token is None:
            self._token = f"vs_{int(self._clock() * 1000)}_{uuid.uuid4().hex[:9]}"
        return self._token
