from dataclasses import dataclass
from typing import Callable, Optional, Union


DEFAULT_USER_ID = "Unknown User"


@dataclass(frozen=True)
class LiteralUser:
    """Явно заданный идентификатор пользователя"""
    value: str


@dataclass(frozen=True)
class DeferredUser:
    """Идентификатор, вычисляемый при каждом обращении"""
    provider: Callable[[], Optional[str]]


UserSource = Union[LiteralUser, DeferredUser, None]


class UserResolver:
    """Определение пользователя, работающего с документом в текущем запросе"""

    def __init__(self, default: str = DEFAULT_USER_ID):
        self.default = default
        self.source: UserSource = None

    def set_user_id(self, user_id: str) -> None:
        self.source = LiteralUser(user_id)

    def get_user_using(self, provider: Callable[[], Optional[str]]) -> None:
        self.source = DeferredUser(provider)

    def resolve(self) -> str:
        """Провайдер вызывается заново при каждом разрешении, результат не кешируется"""
        if isinstance(self.source, DeferredUser):
            user_id = self.source.provider()
        elif isinstance(self.source, LiteralUser):
            user_id = self.source.value
        else:
            user_id = None

        return user_id if user_id else self.default
