from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from osuv1.models.enums import GameMode, ScoringType, Team, TeamType
from osuv1.schemas.fields import (
    U32,
    UNREPORTED_DATE,
    Bool,
    Date,
    MaybeDate,
    MaybeMods,
    Mode,
    ScoringTypeField,
    Str,
    TeamField,
    TeamTypeField,
)

MATCH_SHAPE_ERROR = (
    "Deserializing Match requires either the field `match`, "
    "or the fields `match_id`, `name`, and `start_time`"
)


class GameScore(BaseModel):
    model_config = ConfigDict(extra="ignore")

    slot: U32 = 0
    team: TeamField = Team.NONE
    user_id: U32 = 0
    score: U32 = 0
    max_combo: U32 = Field(default=0, validation_alias=AliasChoices("max_combo", "maxcombo"))
    count50: U32 = 0
    count100: U32 = 0
    count300: U32 = 0
    count_miss: U32 = Field(default=0, validation_alias=AliasChoices("count_miss", "countmiss"))
    count_geki: U32 = Field(default=0, validation_alias=AliasChoices("count_geki", "countgeki"))
    count_katu: U32 = Field(default=0, validation_alias=AliasChoices("count_katu", "countkatu"))
    perfect: Bool = False
    pass_: Bool = Field(
        default=False,
        validation_alias=AliasChoices("pass", "pass_"),
        serialization_alias="pass",
    )
    enabled_mods: MaybeMods = None


class MatchGame(BaseModel):
    model_config = ConfigDict(extra="ignore")

    game_id: U32 = 0
    start_time: Date = UNREPORTED_DATE
    end_time: MaybeDate = None
    beatmap_id: U32 = 0
    mode: Mode = Field(default=GameMode.STANDARD, validation_alias=AliasChoices("mode", "play_mode"))
    scoring_type: ScoringTypeField = ScoringType.SCORE
    team_type: TeamTypeField = TeamType.HEAD_TO_HEAD
    mods: MaybeMods = None
    scores: list[GameScore] = []


class Match(BaseModel):
    """\
    A multiplayer lobby with its played games.

    Upstream nests the lobby metadata under `match` next to `games`,
    while serialized matches carry the same fields flat. Both shapes
    validate into this model.
    """

    model_config = ConfigDict(extra="ignore")

    match_id: U32
    name: Str
    start_time: Date
    end_time: MaybeDate = None
    games: list[MatchGame]

    @model_validator(mode="before")
    @classmethod
    def flatten_match(cls, data):
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        if "match" in data:
            nested = data["match"]
            if not isinstance(nested, dict):
                # get_match answers {"match": 0, "games": []} for unknown ids
                raise ValueError(f"`match` must be an object, got {nested!r}")
            flat = {key: value for key, value in data.items() if key != "match"}
            flat.update(nested)
            return flat

        if not all(key in data for key in ("match_id", "name", "start_time")):
            raise ValueError(MATCH_SHAPE_ERROR)

        return data

    def __eq__(self, other) -> bool:
        if not isinstance(other, Match):
            return NotImplemented
        return self.match_id == other.match_id

    def __hash__(self) -> int:
        return hash(self.match_id)
