from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from osuv1.schemas.fields import (
    F32,
    U32,
    U64,
    UNREPORTED_DATE,
    Date,
    MaybeU32,
    Str,
)


class Event(BaseModel):
    model_config = ConfigDict(extra="ignore")

    html: Str = Field(default="", validation_alias=AliasChoices("html", "display_html"))
    beatmap_id: MaybeU32 = None
    beatmapset_id: MaybeU32 = None
    date: Date = UNREPORTED_DATE
    epic_factor: U32 = Field(
        default=0, validation_alias=AliasChoices("epic_factor", "epicfactor")
    )


class User(BaseModel):
    """A player profile as returned by `get_user`."""

    model_config = ConfigDict(extra="ignore")

    user_id: U32 = 0
    username: Str = ""
    join_date: Date = UNREPORTED_DATE
    count300: U32 = 0
    count100: U32 = 0
    count50: U32 = 0
    playcount: U32 = 0
    ranked_score: U64 = 0
    total_score: U64 = 0
    pp_rank: U32 = 0
    level: F32 = 0.0
    pp_raw: F32 = 0.0
    accuracy: F32 = 0.0
    count_ssh: U32 = Field(default=0, validation_alias=AliasChoices("count_ssh", "count_rank_ssh"))
    count_ss: U32 = Field(default=0, validation_alias=AliasChoices("count_ss", "count_rank_ss"))
    count_sh: U32 = Field(default=0, validation_alias=AliasChoices("count_sh", "count_rank_sh"))
    count_s: U32 = Field(default=0, validation_alias=AliasChoices("count_s", "count_rank_s"))
    count_a: U32 = Field(default=0, validation_alias=AliasChoices("count_a", "count_rank_a"))
    country: Str = ""
    total_seconds_played: U32 = 0
    pp_country_rank: U32 = 0
    events: list[Event] = []

    def total_hits(self) -> int:
        return self.count300 + self.count100 + self.count50

    def get_top_scores(self, osu):
        return osu.top_scores(self.user_id)

    def get_recent_scores(self, osu):
        return osu.recent_scores(self.user_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash(self.user_id)

    def __str__(self) -> str:
        return self.username
