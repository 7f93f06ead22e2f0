import logging
from urllib.parse import quote_plus
from typing import Optional, Union

import httpx
from pydantic import ValidationError

from osuv1.api.endpoints.beatmap import GetBeatmap, GetBeatmaps
from osuv1.api.endpoints.match import GetMatch
from osuv1.api.endpoints.score import GetScore, GetScores
from osuv1.api.endpoints.user import GetUser
from osuv1.api.endpoints.user_score import GetUserBest, GetUserRecent
from osuv1.api.routing import Route, UserIdentification
from osuv1.core.cache import OsuCached, ResponseCache
from osuv1.core.config import settings
from osuv1.core.errors import (
    BuildingClient,
    ChunkingResponse,
    ParsingError,
    RequestError,
    ResponseError,
    ServiceUnavailable,
)
from osuv1.core.metrics import OsuMetrics, RequestKind
from osuv1.core.parsing import decode_body
from osuv1.core.rate_limiter import RateLimiter
from osuv1.schemas.error import APIError

__version__ = "0.1.0"

PROJECT_HOME = "https://pypi.org/project/osuv1/"
USER_AGENT = f"({PROJECT_HOME}, {__version__}) rosu"

logger = logging.getLogger(__name__)

UserLike = Union[int, str, UserIdentification]


class Osu:
    """\
    Client for the osu! v1 api.

    Every request waits for the shared rate limiter before it leaves
    the process. Responses of the kinds enabled in `cached` are kept
    in memory for `cache_duration` seconds and served without
    charging the limiter.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        rate_limiter: Optional[RateLimiter] = None,
        metrics: Optional[OsuMetrics] = None,
        cached: OsuCached = OsuCached.NONE,
        cache_duration: Optional[float] = None,
        base_url: Optional[str] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.OSU_API_KEY
        self.base_url = base_url or settings.OSU_API_BASE_URL
        self.timeout = timeout if timeout is not None else settings.OSU_API_TIMEOUT

        if http_client is None:
            try:
                http_client = httpx.AsyncClient(timeout=self.timeout)
            except (TypeError, ValueError) as e:
                raise BuildingClient(e) from e
        self.client = http_client

        if rate_limiter is None:
            rate_limiter = RateLimiter(
                max_calls=settings.OSU_RATE_LIMIT_CALLS,
                period_seconds=settings.OSU_RATE_LIMIT_PERIOD,
            )
        self.rate_limiter = rate_limiter
        self._metrics = metrics
        self.cached = cached
        self.cache = ResponseCache(
            cache_duration
            if cache_duration is not None
            else settings.OSU_CACHE_DURATION
        )

    @classmethod
    def builder(cls, api_key: Optional[str] = None) -> "OsuBuilder":
        return OsuBuilder(api_key)

    def user(self, user: UserLike) -> GetUser:
        return GetUser(self, user)

    def beatmap(self) -> GetBeatmap:
        return GetBeatmap(self)

    def beatmaps(self) -> GetBeatmaps:
        return GetBeatmaps(self)

    def osu_match(self, match_id: int) -> GetMatch:
        return GetMatch(self, match_id)

    def score(self, map_id: int) -> GetScore:
        return GetScore(self, map_id)

    def scores(self, map_id: int) -> GetScores:
        return GetScores(self, map_id)

    def top_scores(self, user: UserLike) -> GetUserBest:
        return GetUserBest(self, user)

    def recent_scores(self, user: UserLike) -> GetUserRecent:
        return GetUserRecent(self, user)

    def metrics(self) -> Optional[OsuMetrics]:
        return self._metrics

    async def request_bytes(
        self, route: Route, cached: OsuCached, kind: RequestKind
    ) -> bytes:
        if self._metrics is not None:
            self._metrics.record_request(kind)

        use_cache = bool(self.cached & cached)
        if use_cache:
            body = await self.cache.get(route.cache_key)
            if body is not None:
                if self._metrics is not None:
                    self._metrics.record_cache_hit()
                return body

        response = await self.make_request(route)
        try:
            body = await self._read_body(response)
        finally:
            await response.aclose()

        if use_cache:
            await self.cache.set(route.cache_key, body)

        return body

    async def make_request(self, route: Route) -> httpx.Response:
        """\
        Send the request and classify the response by status.

        Returns the still unread response on 200, raises otherwise.
        """
        response = await self.raw(route)
        status = response.status_code

        if status == httpx.codes.OK:
            return response

        try:
            if status == httpx.codes.SERVICE_UNAVAILABLE:
                raise ServiceUnavailable(await self._read_text(response))

            if status == httpx.codes.TOO_MANY_REQUESTS:
                logger.warning(f"429 response for {route}: {response.headers}")

            body = decode_body(await self._read_body(response))
        finally:
            await response.aclose()

        try:
            error = APIError.model_validate_json(body)
        except ValidationError as e:
            raise ParsingError(body, e) from e

        raise ResponseError(status, body, error)

    async def raw(self, route: Route) -> httpx.Response:
        url = f"{self.base_url}{route}"

        await self.rate_limiter.acquire()

        logger.debug(f"URL: {url}")

        request = self.client.build_request(
            "GET", f"{url}&k={quote_plus(self.api_key)}", headers={"User-Agent": USER_AGENT}
        )
        try:
            return await self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"osu! API request failed: GET {url} - {e}")
            raise RequestError(e) from e

    @staticmethod
    async def _read_body(response: httpx.Response) -> bytes:
        try:
            return await response.aread()
        except httpx.HTTPError as e:
            raise ChunkingResponse(e) from e

    @staticmethod
    async def _read_text(response: httpx.Response) -> Optional[str]:
        try:
            return decode_body(await response.aread())
        except httpx.HTTPError as e:
            logger.debug(f"Could not read 503 body: {e}")
            return None

    async def close(self):
        await self.client.aclose()

    async def aclose(self):
        await self.close()

    async def __aenter__(self) -> "Osu":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class OsuBuilder:
    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key
        self._timeout: Optional[float] = None
        self._http_client: Optional[httpx.AsyncClient] = None
        self._rate_limit: Optional[tuple[int, float]] = None
        self._metrics = settings.OSU_METRICS_ENABLED
        self._cached = OsuCached.NONE
        self._cache_duration: Optional[float] = None

    def api_key(self, api_key: str) -> "OsuBuilder":
        self._api_key = api_key
        return self

    def timeout(self, seconds: float) -> "OsuBuilder":
        """Timeout for http requests, defaults to 10 seconds."""
        self._timeout = seconds
        return self

    def http_client(self, client: httpx.AsyncClient) -> "OsuBuilder":
        """Use a preconfigured client; its own timeout is overwritten."""
        self._http_client = client
        return self

    def rate_limit(self, max_calls: int, period_seconds: float) -> "OsuBuilder":
        self._rate_limit = (max_calls, period_seconds)
        return self

    def metrics(self, enabled: bool = True) -> "OsuBuilder":
        self._metrics = enabled
        return self

    def cached(self, cached: OsuCached) -> "OsuBuilder":
        self._cached = cached
        return self

    def add_cached(self, cached: OsuCached) -> "OsuBuilder":
        self._cached |= cached
        return self

    def cache_duration(self, seconds: float) -> "OsuBuilder":
        self._cache_duration = seconds
        return self

    def build(self) -> Osu:
        timeout = self._timeout if self._timeout is not None else settings.OSU_API_TIMEOUT

        try:
            if self._http_client is not None:
                self._http_client.timeout = httpx.Timeout(timeout)
            rate_limiter = None
            if self._rate_limit is not None:
                rate_limiter = RateLimiter(*self._rate_limit)
        except (TypeError, ValueError) as e:
            raise BuildingClient(e) from e

        return Osu(
            self._api_key,
            http_client=self._http_client,
            timeout=timeout,
            rate_limiter=rate_limiter,
            metrics=OsuMetrics() if self._metrics else None,
            cached=self._cached,
            cache_duration=self._cache_duration,
        )
