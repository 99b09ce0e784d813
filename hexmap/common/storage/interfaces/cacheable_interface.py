from abc import ABC, abstractmethod
from typing import Sequence, Any


class Cacheable(ABC):
    @abstractmethod
    def get_or_compute(self, resolution: int, viewport: Any) -> Sequence:
        pass
