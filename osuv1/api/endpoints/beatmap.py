from datetime import datetime, timezone
from typing import Optional, Union

from osuv1.api.endpoints.base import PendingRequest
from osuv1.api.routing import BeatmapsRoute, UserIdentification
from osuv1.core.cache import OsuCached
from osuv1.core.metrics import RequestKind
from osuv1.core.parsing import parse_first, parse_list
from osuv1.models.enums import GameMode
from osuv1.models.mods import GameMods
from osuv1.schemas.beatmap import Beatmap

MAX_LIMIT = 500


class _BeatmapRequest(PendingRequest):
    kind = RequestKind.BEATMAPS
    cached = OsuCached.BEATMAP

    default_limit: Optional[int] = None

    def __init__(self, osu):
        super().__init__(osu)
        self._creator: Optional[UserIdentification] = None
        self._hash: Optional[str] = None
        self._limit = self.default_limit
        self._map_id: Optional[int] = None
        self._mapset_id: Optional[int] = None
        self._mode: Optional[GameMode] = None
        self._mods: Optional[GameMods] = None
        self._since: Optional[datetime] = None
        self._with_converted: Optional[bool] = None

    def creator(self, creator: Union[int, str, UserIdentification]):
        """Mapset creator, either by id or by name."""
        self._creator = UserIdentification.of(creator)
        return self

    def hash(self, hash: str):
        """The beatmap md5, e.g. from a replay file."""
        self._hash = hash
        return self

    def limit(self, limit: int):
        self._limit = min(max(limit, 0), MAX_LIMIT)
        return self

    def map_id(self, map_id: int):
        self._map_id = map_id
        return self

    def mapset_id(self, mapset_id: int):
        self._mapset_id = mapset_id
        return self

    def mode(self, mode: GameMode):
        self._mode = GameMode(mode)
        return self

    def mods(self, mods: Union[GameMods, int]):
        """Adjust difficulty values by the given mods."""
        self._mods = mods if isinstance(mods, GameMods) else GameMods.from_bits(mods)
        return self

    def since(self, since: datetime):
        """Only ranked or loved maps approved after this date."""
        self._since = since.astimezone(timezone.utc) if since.tzinfo else since
        return self

    def with_converted(self, with_converted: bool):
        """Include converts; only meaningful for a non-standard mode."""
        self._with_converted = with_converted
        return self

    def route(self) -> BeatmapsRoute:
        return BeatmapsRoute(
            creator=self._creator,
            hash=self._hash,
            limit=self._limit,
            map_id=self._map_id,
            mapset_id=self._mapset_id,
            mode=self._mode,
            mods=self._mods,
            since=self._since,
            with_converted=self._with_converted,
        )


class GetBeatmaps(_BeatmapRequest):
    async def send(self) -> list[Beatmap]:
        return parse_list(await self.fetch(), Beatmap)


class GetBeatmap(_BeatmapRequest):
    default_limit = 1

    async def send(self) -> Optional[Beatmap]:
        return parse_first(await self.fetch(), Beatmap)
