from enum import Enum
from typing import Optional

from prometheus_client import CollectorRegistry, Counter


class RequestKind(str, Enum):
    BEATMAPS = "Beatmaps"
    MATCHES = "Matches"
    RECENT_SCORES = "RecentScores"
    SCORES = "Scores"
    TOP_SCORES = "TopScores"
    USERS = "Users"


class OsuMetrics:
    """Per-client request counters, registered on their own registry."""

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        self.requests = Counter(
            "osu_requests_total",
            "Total requests sent to the osu! api by request kind",
            ["type"],
            registry=self.registry,
        )
        self.cache_hits = Counter(
            "osu_cache_hits_total",
            "Requests answered from the response cache",
            registry=self.registry,
        )

        # expose every series at zero from the start
        for kind in RequestKind:
            self.requests.labels(type=kind.value)

    def record_request(self, kind: RequestKind) -> None:
        self.requests.labels(type=kind.value).inc()

    def record_cache_hit(self) -> None:
        self.cache_hits.inc()

    def count(self, kind: RequestKind) -> float:
        value = self.registry.get_sample_value(
            "osu_requests_total", {"type": kind.value}
        )
        return 0.0 if value is None else value
