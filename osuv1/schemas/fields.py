"""\
Coercion rules for the loosely typed fields of the v1 api.

Upstream encodes numbers as strings, enums as either their code or
a textual alias, and omits or nulls optional values. Each rule below
accepts exactly the shapes listed in its docstring and raises
`ValueError` for anything else, which pydantic turns into a
validation error.
"""
import logging
from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import PlainSerializer, PlainValidator

from osuv1.models.enums import (
    ApprovalStatus,
    GameMode,
    Genre,
    Grade,
    Language,
    ScoringType,
    Team,
    TeamType,
)
from osuv1.models.mods import GameMods

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
UNREPORTED_DATE = datetime(1970, 1, 1, tzinfo=timezone.utc)

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


def _to_int(value, upper: int) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected an integer or a stringified integer, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        if not value.strip():
            return None
        try:
            number = int(value.strip())
        except ValueError:
            raise ValueError(f"invalid integer string {value!r}") from None
    else:
        raise ValueError(f"expected an integer or a stringified integer, got {value!r}")

    if number > upper:
        raise ValueError(f"integer {number} out of range")
    return max(number, 0)


def to_maybe_u32(value) -> Optional[int]:
    """int, decimal string, empty string, or null; negatives clamp to 0."""
    return _to_int(value, U32_MAX)


def to_u32(value) -> int:
    number = to_maybe_u32(value)
    return 0 if number is None else number


def to_maybe_u64(value) -> Optional[int]:
    """int, decimal string, or null; negatives clamp to 0."""
    return _to_int(value, U64_MAX)


def to_u64(value) -> int:
    number = to_maybe_u64(value)
    return 0 if number is None else number


def to_maybe_f32(value) -> Optional[float]:
    """int, float, decimal string, or null."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected a number or a stringified number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ValueError(f"invalid float string {value!r}") from None
    raise ValueError(f"expected a number or a stringified number, got {value!r}")


def to_f32(value) -> float:
    number = to_maybe_f32(value)
    return 0.0 if number is None else number


def to_maybe_bool(value) -> Optional[bool]:
    """bool, "true"/"false", 0/1 as number or string, or null."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
    elif isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1"):
            return True
        if text in ("false", "0"):
            return False
    raise ValueError(f"expected a bool, a stringified bool, 0 or 1, got {value!r}")


def to_bool(value) -> bool:
    return bool(to_maybe_bool(value))


def parse_date(value: str) -> datetime:
    return datetime.strptime(value.strip(), DATE_FORMAT).replace(tzinfo=timezone.utc)


def to_date(value) -> datetime:
    """`YYYY-MM-DD HH:MM:SS` in UTC; null reads as unreported."""
    if value is None:
        return UNREPORTED_DATE
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not isinstance(value, str):
        raise ValueError(f"expected a date string, got {value!r}")
    try:
        return parse_date(value)
    except ValueError:
        raise ValueError(
            f"invalid date {value!r}, expected format YYYY-MM-DD HH:MM:SS"
        ) from None


def to_maybe_date(value) -> Optional[datetime]:
    """Like `to_date`, but null and malformed input become None."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return parse_date(value)
    except (TypeError, ValueError, AttributeError):
        logger.debug(f"Discarding malformed optional date {value!r}")
        return None


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def format_maybe_date(value: Optional[datetime]) -> Optional[str]:
    return None if value is None else format_date(value)


def to_maybe_mods(value) -> Optional[GameMods]:
    """Mod bits as int or decimal string, mod abbreviations, or null."""
    if value is None or isinstance(value, GameMods):
        return value
    if isinstance(value, bool):
        raise ValueError(f"expected mods, got {value!r}")
    if isinstance(value, int):
        return GameMods.from_bits(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return GameMods.from_bits(int(text))
        return GameMods.from_str(text)
    raise ValueError(f"expected mods, got {value!r}")


def to_mods(value) -> GameMods:
    mods = to_maybe_mods(value)
    return GameMods.NOMOD if mods is None else mods


def to_mode(value) -> GameMode:
    mode = GameMode.from_wire(value)
    return GameMode.default() if mode is None else mode


def to_approval_status(value) -> ApprovalStatus:
    status = ApprovalStatus.from_wire(value)
    return ApprovalStatus.default() if status is None else status


def to_genre(value) -> Genre:
    genre = Genre.from_wire(value)
    return Genre.default() if genre is None else genre


def to_language(value) -> Language:
    language = Language.from_wire(value)
    return Language.default() if language is None else language


def to_scoring_type(value) -> ScoringType:
    scoring_type = ScoringType.from_wire(value)
    return ScoringType.default() if scoring_type is None else scoring_type


def to_team_type(value) -> TeamType:
    team_type = TeamType.from_wire(value)
    return TeamType.default() if team_type is None else team_type


def to_team(value) -> Team:
    team = Team.from_wire(value)
    return Team.default() if team is None else team


def to_grade(value) -> Grade:
    grade = Grade.from_wire(value)
    return Grade.F if grade is None else grade


def to_str(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"expected a string, got {value!r}")


def to_maybe_str(value) -> Optional[str]:
    return None if value is None else to_str(value)


def first_item(items):
    """\
    Reduce an array body to its first element.

    The whole array must still be a list, so a malformed body
    fails instead of being cut short.
    """
    if not isinstance(items, list):
        raise ValueError(f"expected an array, got {type(items).__name__}")
    return items[0] if items else None


def _code(member) -> int:
    return int(member)


U32 = Annotated[int, PlainValidator(to_u32)]
MaybeU32 = Annotated[Optional[int], PlainValidator(to_maybe_u32)]
U64 = Annotated[int, PlainValidator(to_u64)]
MaybeU64 = Annotated[Optional[int], PlainValidator(to_maybe_u64)]
F32 = Annotated[float, PlainValidator(to_f32)]
MaybeF32 = Annotated[Optional[float], PlainValidator(to_maybe_f32)]
Bool = Annotated[bool, PlainValidator(to_bool)]
MaybeBool = Annotated[Optional[bool], PlainValidator(to_maybe_bool)]
Str = Annotated[str, PlainValidator(to_str)]
MaybeStr = Annotated[Optional[str], PlainValidator(to_maybe_str)]
Date = Annotated[
    datetime, PlainValidator(to_date), PlainSerializer(format_date, return_type=str)
]
MaybeDate = Annotated[
    Optional[datetime],
    PlainValidator(to_maybe_date),
    PlainSerializer(format_maybe_date, return_type=Optional[str]),
]
Mods = Annotated[
    GameMods, PlainValidator(to_mods), PlainSerializer(_code, return_type=int)
]
MaybeMods = Annotated[
    Optional[GameMods],
    PlainValidator(to_maybe_mods),
    PlainSerializer(lambda m: None if m is None else int(m), return_type=Optional[int]),
]
Mode = Annotated[
    GameMode, PlainValidator(to_mode), PlainSerializer(_code, return_type=int)
]
Approval = Annotated[
    ApprovalStatus,
    PlainValidator(to_approval_status),
    PlainSerializer(_code, return_type=int),
]
GenreField = Annotated[
    Genre, PlainValidator(to_genre), PlainSerializer(_code, return_type=int)
]
LanguageField = Annotated[
    Language, PlainValidator(to_language), PlainSerializer(_code, return_type=int)
]
ScoringTypeField = Annotated[
    ScoringType,
    PlainValidator(to_scoring_type),
    PlainSerializer(_code, return_type=int),
]
TeamTypeField = Annotated[
    TeamType, PlainValidator(to_team_type), PlainSerializer(_code, return_type=int)
]
TeamField = Annotated[
    Team, PlainValidator(to_team), PlainSerializer(_code, return_type=int)
]
GradeField = Annotated[
    Grade, PlainValidator(to_grade), PlainSerializer(str, return_type=str)
]
