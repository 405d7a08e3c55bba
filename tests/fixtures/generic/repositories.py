from abc import ABC, abstractmethod
from typing import Dict, Generic, Optional, TypeVar

from tests.fixtures.generic.models import User

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    @abstractmethod
    def get(self, key: str) -> Optional[T]:
        pass


class UserRepositoryService(Repository[User]):
    def __init__(self) -> None:
        self.users: Dict[str, User] = {"ada": User("ada")}

    def get(self, key: str) -> Optional[User]:
        return self.users.get(key)
