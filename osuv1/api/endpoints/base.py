from typing import ClassVar

from osuv1.api.routing import Route
from osuv1.core.cache import OsuCached
from osuv1.core.metrics import RequestKind


class PendingRequest:
    """\
    Base for the fluent request builders.

    Setters return the builder itself. Awaiting the builder, or its
    `send()` coroutine, performs the request through the client.
    """

    kind: ClassVar[RequestKind]
    cached: ClassVar[OsuCached]

    def __init__(self, osu):
        self.osu = osu

    def route(self) -> Route:
        raise NotImplementedError

    async def fetch(self) -> bytes:
        return await self.osu.request_bytes(self.route(), self.cached, self.kind)

    async def send(self):
        raise NotImplementedError

    def __await__(self):
        return self.send().__await__()
