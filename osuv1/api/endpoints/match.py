from osuv1.api.endpoints.base import PendingRequest
from osuv1.api.routing import MatchRoute
from osuv1.core.cache import OsuCached
from osuv1.core.metrics import RequestKind
from osuv1.core.parsing import parse_match
from osuv1.schemas.match import Match


class GetMatch(PendingRequest):
    """Private and unknown matches raise `InvalidMultiplayerMatch`."""

    kind = RequestKind.MATCHES
    cached = OsuCached.MATCH

    def __init__(self, osu, match_id: int):
        super().__init__(osu)
        self._match_id = match_id

    def route(self) -> MatchRoute:
        return MatchRoute(match_id=self._match_id)

    async def send(self) -> Match:
        return parse_match(await self.fetch())
