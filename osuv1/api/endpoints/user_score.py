from typing import Optional, Union

from osuv1.api.endpoints.base import PendingRequest
from osuv1.api.routing import UserBestRoute, UserIdentification, UserRecentRoute
from osuv1.core.cache import OsuCached
from osuv1.core.metrics import RequestKind
from osuv1.core.parsing import parse_list
from osuv1.models.enums import GameMode
from osuv1.schemas.score import Score


class _UserScoreRequest(PendingRequest):
    cached = OsuCached.SCORE

    max_limit: int
    route_class: type[UserBestRoute]

    def __init__(self, osu, user: Union[int, str, UserIdentification]):
        super().__init__(osu)
        self._user = UserIdentification.of(user)
        self._limit: Optional[int] = None
        self._mode: Optional[GameMode] = None

    def limit(self, limit: int):
        self._limit = min(max(limit, 0), self.max_limit)
        return self

    def mode(self, mode: GameMode):
        self._mode = GameMode(mode)
        return self

    def route(self) -> UserBestRoute:
        return self.route_class(user=self._user, limit=self._limit, mode=self._mode)

    async def send(self) -> list[Score]:
        return parse_list(await self.fetch(), Score)


class GetUserBest(_UserScoreRequest):
    kind = RequestKind.TOP_SCORES
    max_limit = 100
    route_class = UserBestRoute


class GetUserRecent(_UserScoreRequest):
    kind = RequestKind.RECENT_SCORES
    max_limit = 50
    route_class = UserRecentRoute
