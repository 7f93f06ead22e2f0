from typing import Optional, Union

from osuv1.api.endpoints.base import PendingRequest
from osuv1.api.routing import UserIdentification, UserRoute
from osuv1.core.cache import OsuCached
from osuv1.core.metrics import RequestKind
from osuv1.core.parsing import parse_first
from osuv1.models.enums import GameMode
from osuv1.schemas.user import User


class GetUser(PendingRequest):
    kind = RequestKind.USERS
    cached = OsuCached.USER

    def __init__(self, osu, user: Union[int, str, UserIdentification]):
        super().__init__(osu)
        self._user = UserIdentification.of(user)
        self._mode: Optional[GameMode] = None
        self._event_days: Optional[int] = None

    def mode(self, mode: GameMode):
        self._mode = GameMode(mode)
        return self

    def event_days(self, days: int):
        """Max age of the included events in days, between 1 and 31."""
        self._event_days = min(max(days, 1), 31)
        return self

    def route(self) -> UserRoute:
        return UserRoute(user=self._user, mode=self._mode, event_days=self._event_days)

    async def send(self) -> Optional[User]:
        return parse_first(await self.fetch(), User)
