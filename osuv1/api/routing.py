"""\
Request descriptors for the six v1 endpoints.

A route renders to the path and query of its request, without the
base url and without the api key. The rendered form is stable, so it
doubles as the cache key of the response body.
"""
from datetime import datetime
from typing import ClassVar, Optional, Union
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr

from osuv1.models.enums import GameMode
from osuv1.models.mods import GameMods
from osuv1.schemas.fields import format_date

CONV_TAG = "a"
EVENT_DAYS_TAG = "event_days"
HASH_TAG = "h"
LIMIT_TAG = "limit"
MAP_TAG = "b"
MODE_TAG = "m"
MODS_TAG = "mods"
MP_TAG = "mp"
SET_TAG = "s"
SINCE_TAG = "since"


class UserIdentification(BaseModel):
    """A user given either by numeric id or by name."""

    model_config = ConfigDict(frozen=True)

    value: Union[StrictInt, StrictStr]

    @classmethod
    def of(cls, user: Union[int, str, "UserIdentification"]) -> "UserIdentification":
        if isinstance(user, cls):
            return user
        if isinstance(user, bool):
            raise TypeError("a user is identified by an int id or a str name")
        return cls(value=user)

    @property
    def is_id(self) -> bool:
        return isinstance(self.value, int)

    def __str__(self) -> str:
        if self.is_id:
            return f"type=id&u={self.value}"
        return f"type=string&u={quote_plus(self.value)}"


class Route(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: ClassVar[str]

    def _head(self) -> str:
        return f"{self.endpoint}?"

    def _params(self) -> list[str]:
        return []

    def __str__(self) -> str:
        return self._head() + "".join(f"&{param}" for param in self._params())

    @property
    def cache_key(self) -> str:
        return str(self)


def _mode_param(mode: Optional[GameMode]) -> list[str]:
    return [] if mode is None else [f"{MODE_TAG}={int(mode)}"]


def _limit_param(limit: Optional[int]) -> list[str]:
    return [] if limit is None else [f"{LIMIT_TAG}={limit}"]


class BeatmapsRoute(Route):
    endpoint: ClassVar[str] = "get_beatmaps"

    creator: Optional[UserIdentification] = None
    hash: Optional[str] = None
    limit: Optional[int] = None
    map_id: Optional[int] = None
    mapset_id: Optional[int] = None
    mode: Optional[GameMode] = None
    mods: Optional[GameMods] = None
    since: Optional[datetime] = None
    with_converted: Optional[bool] = None

    def _params(self) -> list[str]:
        params = []
        if self.creator is not None:
            params.append(str(self.creator))
        if self.hash is not None:
            params.append(f"{HASH_TAG}={self.hash}")
        params += _limit_param(self.limit)
        if self.map_id is not None:
            params.append(f"{MAP_TAG}={self.map_id}")
        if self.mapset_id is not None:
            params.append(f"{SET_TAG}={self.mapset_id}")
        params += _mode_param(self.mode)
        if self.mods is not None:
            params.append(f"{MODS_TAG}={self.mods.bits}")
        if self.since is not None:
            since = quote_plus(format_date(self.since), safe=":")
            params.append(f"{SINCE_TAG}={since}")
        if self.with_converted is not None:
            params.append(f"{CONV_TAG}={int(self.with_converted)}")
        return params


class MatchRoute(Route):
    endpoint: ClassVar[str] = "get_match"

    match_id: int

    def _head(self) -> str:
        return f"{self.endpoint}?{MP_TAG}={self.match_id}"


class ScoresRoute(Route):
    endpoint: ClassVar[str] = "get_scores"

    map_id: int
    limit: Optional[int] = None
    mode: Optional[GameMode] = None
    mods: Optional[GameMods] = None
    user: Optional[UserIdentification] = None

    def _head(self) -> str:
        return f"{self.endpoint}?{MAP_TAG}={self.map_id}"

    def _params(self) -> list[str]:
        params = _limit_param(self.limit) + _mode_param(self.mode)
        if self.mods is not None:
            params.append(f"{MODS_TAG}={self.mods.bits}")
        if self.user is not None:
            params.append(str(self.user))
        return params


class UserRoute(Route):
    endpoint: ClassVar[str] = "get_user"

    user: UserIdentification
    mode: Optional[GameMode] = None
    event_days: Optional[int] = None

    def _head(self) -> str:
        return f"{self.endpoint}?{self.user}"

    def _params(self) -> list[str]:
        params = _mode_param(self.mode)
        if self.event_days is not None:
            params.append(f"{EVENT_DAYS_TAG}={self.event_days}")
        return params


class UserBestRoute(Route):
    endpoint: ClassVar[str] = "get_user_best"

    user: UserIdentification
    limit: Optional[int] = None
    mode: Optional[GameMode] = None

    def _head(self) -> str:
        return f"{self.endpoint}?{self.user}"

    def _params(self) -> list[str]:
        return _limit_param(self.limit) + _mode_param(self.mode)


class UserRecentRoute(UserBestRoute):
    endpoint: ClassVar[str] = "get_user_recent"
