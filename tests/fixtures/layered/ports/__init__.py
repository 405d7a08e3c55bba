from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        pass


class Archiver(ABC):
    @abstractmethod
    def archive(self, key: str) -> str:
        pass
