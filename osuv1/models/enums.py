import functools
from enum import IntEnum
from enum import unique
from typing import Optional

from osuv1.core.errors import ApprovalStatusParsingError
from osuv1.core.errors import EnumParsingError
from osuv1.core.errors import GradeParsingError

__all__ = (
    "ApprovalStatus",
    "GameMode",
    "Genre",
    "Grade",
    "Language",
    "ScoringType",
    "Team",
    "TeamType",
)


def _lenient(cls, value, aliases: dict[str, int]):
    """\
    Shared wire parsing for the numeric enums.

    Accepts the code as an integer or a decimal string, and the
    lowercase textual aliases of the enum. `None` and unknown text
    both map to `None`, an unknown numeric code raises.
    """
    if value is None or isinstance(value, cls):
        return value

    if isinstance(value, bool):
        raise cls._parse_error(value)

    if isinstance(value, int):
        return cls.try_from(value)

    if isinstance(value, str):
        text = value.strip()
        try:
            code = int(text)
        except ValueError:
            code = aliases.get(text.lower())
            if code is None:
                return None
        return cls.try_from(code)

    raise cls._parse_error(value)


class _WireEnum(IntEnum):
    @classmethod
    def _parse_error(cls, value) -> EnumParsingError:
        return EnumParsingError(cls.__name__, value)

    @classmethod
    def try_from(cls, code: int):
        try:
            return cls(code)
        except ValueError:
            raise cls._parse_error(code) from None

    @property
    def code(self) -> int:
        return self.value


@unique
class GameMode(_WireEnum):
    STANDARD = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3

    @classmethod
    def default(cls) -> "GameMode":
        return cls.STANDARD

    @classmethod
    def from_wire(cls, value) -> Optional["GameMode"]:
        return _lenient(cls, value, gamemode_aliases)

    def __str__(self) -> str:
        return GAMEMODE_REPR_LIST[self.value]


GAMEMODE_REPR_LIST = ("osu", "taiko", "fruits", "mania")

gamemode_aliases = {
    "osu": 0,
    "osu!": 0,
    "std": 0,
    "standard": 0,
    "taiko": 1,
    "tko": 1,
    "ctb": 2,
    "fruits": 2,
    "catch": 2,
    "mania": 3,
    "mna": 3,
}


@unique
class ApprovalStatus(_WireEnum):
    GRAVEYARD = -2
    WIP = -1
    PENDING = 0
    RANKED = 1
    APPROVED = 2
    QUALIFIED = 3
    LOVED = 4

    @classmethod
    def _parse_error(cls, value) -> EnumParsingError:
        return ApprovalStatusParsingError(value)

    @classmethod
    def default(cls) -> "ApprovalStatus":
        return cls.PENDING

    @classmethod
    def from_wire(cls, value) -> Optional["ApprovalStatus"]:
        return _lenient(cls, value, approval_status_aliases)


approval_status_aliases = {
    "loved": 4,
    "qualified": 3,
    "approved": 2,
    "ranked": 1,
    "pending": 0,
    "wip": -1,
    "graveyard": -2,
}


@unique
class Genre(_WireEnum):
    ANY = 0
    UNSPECIFIED = 1
    VIDEO_GAME = 2
    ANIME = 3
    ROCK = 4
    POP = 5
    OTHER = 6
    NOVELTY = 7
    HIP_HOP = 9
    ELECTRONIC = 10
    METAL = 11
    CLASSICAL = 12
    FOLK = 13
    JAZZ = 14

    @classmethod
    def default(cls) -> "Genre":
        return cls.ANY

    @classmethod
    def from_wire(cls, value) -> Optional["Genre"]:
        return _lenient(cls, value, genre_aliases)


genre_aliases = {
    "any": 0,
    "unspecified": 1,
    "videogame": 2,
    "video game": 2,
    "anime": 3,
    "rock": 4,
    "pop": 5,
    "other": 6,
    "novelty": 7,
    "hiphop": 9,
    "hip hop": 9,
    "electronic": 10,
    "metal": 11,
    "classical": 12,
    "folk": 13,
    "jazz": 14,
}


@unique
class Language(_WireEnum):
    ANY = 0
    OTHER = 1
    ENGLISH = 2
    JAPANESE = 3
    CHINESE = 4
    INSTRUMENTAL = 5
    KOREAN = 6
    FRENCH = 7
    GERMAN = 8
    SWEDISH = 9
    SPANISH = 10
    ITALIAN = 11
    RUSSIAN = 12
    POLISH = 13
    UNSPECIFIED = 14

    @classmethod
    def default(cls) -> "Language":
        return cls.ANY

    @classmethod
    def from_wire(cls, value) -> Optional["Language"]:
        return _lenient(cls, value, language_aliases)


language_aliases = {
    "any": 0,
    "other": 1,
    "english": 2,
    "japanese": 3,
    "chinese": 4,
    "instrumental": 5,
    "korean": 6,
    "french": 7,
    "german": 8,
    "swedish": 9,
    "spanish": 10,
    "italian": 11,
    "russian": 12,
    "polish": 13,
    "unspecified": 14,
}


@unique
class ScoringType(_WireEnum):
    SCORE = 0
    ACCURACY = 1
    COMBO = 2
    SCOREV2 = 3

    @classmethod
    def default(cls) -> "ScoringType":
        return cls.SCORE

    @classmethod
    def from_wire(cls, value) -> Optional["ScoringType"]:
        return _lenient(cls, value, scoring_type_aliases)


scoring_type_aliases = {
    "score": 0,
    "accuracy": 1,
    "combo": 2,
    "scorev2": 3,
}


@unique
class TeamType(_WireEnum):
    HEAD_TO_HEAD = 0
    TAG_COOP = 1
    TEAM_VS = 2
    TAG_TEAM_VS = 3

    @classmethod
    def default(cls) -> "TeamType":
        return cls.HEAD_TO_HEAD

    @classmethod
    def from_wire(cls, value) -> Optional["TeamType"]:
        return _lenient(cls, value, team_type_aliases)


team_type_aliases = {
    "headtohead": 0,
    "head-to-head": 0,
    "tagcoop": 1,
    "tag-coop": 1,
    "teamvs": 2,
    "team-vs": 2,
    "tagteamvs": 3,
    "tag-team-vs": 3,
}


@unique
class Team(_WireEnum):
    NONE = 0
    BLUE = 1
    RED = 2

    @classmethod
    def default(cls) -> "Team":
        return cls.NONE

    @classmethod
    def from_wire(cls, value) -> Optional["Team"]:
        return _lenient(cls, value, team_aliases)


team_aliases = {
    "none": 0,
    "blue": 1,
    "red": 2,
}


@unique
class Grade(IntEnum):
    # ordered so that comparisons follow grade quality
    F = 0
    D = 1
    C = 2
    B = 3
    A = 4
    S = 5
    SH = 6  # HD S
    X = 7  # SS
    XH = 8  # HD SS

    @classmethod
    @functools.cache
    def from_str(cls, s: str) -> "Grade":
        try:
            return grade_aliases[s.strip().lower()]
        except KeyError:
            raise GradeParsingError(s) from None

    @classmethod
    def from_wire(cls, value) -> Optional["Grade"]:
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_str(value)
        raise GradeParsingError(value)

    def eq_letter(self, other: "Grade") -> bool:
        """Compare two grades, ignoring the silver (hidden) variants."""
        if self in (Grade.X, Grade.XH):
            return other in (Grade.X, Grade.XH)
        if self in (Grade.S, Grade.SH):
            return other in (Grade.S, Grade.SH)
        return self is other

    def __str__(self) -> str:
        return self.name


grade_aliases = {
    "xh": Grade.XH,
    "ssh": Grade.XH,
    "x": Grade.X,
    "ss": Grade.X,
    "sh": Grade.SH,
    "s": Grade.S,
    "a": Grade.A,
    "b": Grade.B,
    "c": Grade.C,
    "d": Grade.D,
    "f": Grade.F,
}
