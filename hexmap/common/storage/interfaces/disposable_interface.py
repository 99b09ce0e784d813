from abc import ABC, abstractmethod


class IDisposable(ABC):
    @abstractmethod
    def try_init(self, source_path: str):
        """Initialize local variable with data"""
        pass
