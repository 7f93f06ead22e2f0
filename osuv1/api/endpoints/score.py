from typing import Optional, Union

from osuv1.api.endpoints.base import PendingRequest
from osuv1.api.routing import ScoresRoute, UserIdentification
from osuv1.core.cache import OsuCached
from osuv1.core.metrics import RequestKind
from osuv1.core.parsing import parse_first, parse_list
from osuv1.models.enums import GameMode
from osuv1.models.mods import GameMods
from osuv1.schemas.score import Score

MIN_LIMIT = 1
MAX_LIMIT = 100


class _ScoreRequest(PendingRequest):
    kind = RequestKind.SCORES
    cached = OsuCached.SCORE

    def __init__(self, osu, map_id: int):
        super().__init__(osu)
        self._map_id = map_id
        self._limit: Optional[int] = None
        self._mode: Optional[GameMode] = None
        self._mods: Optional[GameMods] = None
        self._user: Optional[UserIdentification] = None

    def limit(self, limit: int):
        self._limit = min(max(limit, MIN_LIMIT), MAX_LIMIT)
        return self

    def mode(self, mode: GameMode):
        self._mode = GameMode(mode)
        return self

    def mods(self, mods: Union[GameMods, int]):
        """Only scores set with exactly these mods."""
        self._mods = mods if isinstance(mods, GameMods) else GameMods.from_bits(mods)
        return self

    def user(self, user: Union[int, str, UserIdentification]):
        self._user = UserIdentification.of(user)
        return self

    def route(self) -> ScoresRoute:
        return ScoresRoute(
            map_id=self._map_id,
            limit=self._limit,
            mode=self._mode,
            mods=self._mods,
            user=self._user,
        )


class GetScores(_ScoreRequest):
    async def send(self) -> list[Score]:
        return parse_list(await self.fetch(), Score)


class GetScore(_ScoreRequest):
    async def send(self) -> Optional[Score]:
        return parse_first(await self.fetch(), Score)
