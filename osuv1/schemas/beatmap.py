from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from osuv1.models.enums import ApprovalStatus, GameMode, Genre, Language
from osuv1.schemas.fields import (
    F32,
    U32,
    UNREPORTED_DATE,
    Approval,
    Bool,
    Date,
    GenreField,
    LanguageField,
    MaybeDate,
    MaybeF32,
    MaybeStr,
    MaybeU32,
    Mode,
    Str,
)


class Beatmap(BaseModel):
    model_config = ConfigDict(extra="ignore")

    approval_status: Approval = Field(
        default=ApprovalStatus.PENDING,
        validation_alias=AliasChoices("approval_status", "approved"),
    )
    submit_date: Date = UNREPORTED_DATE
    approved_date: MaybeDate = None
    last_update: Date = UNREPORTED_DATE
    artist: Str = ""
    title: Str = ""
    version: Str = ""
    beatmap_id: U32 = 0
    beatmapset_id: U32 = 0
    bpm: F32 = 0.0
    creator: Str = ""
    creator_id: U32 = 0
    stars: F32 = Field(default=0.0, validation_alias=AliasChoices("stars", "difficultyrating"))
    stars_aim: MaybeF32 = Field(default=None, validation_alias=AliasChoices("stars_aim", "diff_aim"))
    stars_speed: MaybeF32 = Field(
        default=None, validation_alias=AliasChoices("stars_speed", "diff_speed")
    )
    diff_cs: F32 = Field(default=0.0, validation_alias=AliasChoices("diff_cs", "diff_size"))
    diff_od: F32 = Field(default=0.0, validation_alias=AliasChoices("diff_od", "diff_overall"))
    diff_ar: F32 = Field(default=0.0, validation_alias=AliasChoices("diff_ar", "diff_approach"))
    diff_hp: F32 = Field(default=0.0, validation_alias=AliasChoices("diff_hp", "diff_drain"))
    seconds_drain: U32 = Field(
        default=0, validation_alias=AliasChoices("seconds_drain", "hit_length")
    )
    seconds_total: U32 = Field(
        default=0, validation_alias=AliasChoices("seconds_total", "total_length")
    )
    source: Str = ""
    genre: GenreField = Field(default=Genre.ANY, validation_alias=AliasChoices("genre", "genre_id"))
    language: LanguageField = Field(
        default=Language.ANY, validation_alias=AliasChoices("language", "language_id")
    )
    mode: Mode = GameMode.STANDARD
    tags: Str = ""
    favourite_count: U32 = 0
    rating: F32 = 0.0
    playcount: U32 = 0
    passcount: U32 = 0
    count_circle: U32 = Field(default=0, validation_alias=AliasChoices("count_circle", "count_normal"))
    count_slider: U32 = 0
    count_spinner: U32 = 0
    max_combo: MaybeU32 = None
    download_unavailable: Bool = False
    audio_unavailable: Bool = False
    file_md5: MaybeStr = None

    def count_objects(self) -> int:
        """Count all circles, sliders, and spinners of the map."""
        return self.count_circle + self.count_slider + self.count_spinner

    def get_creator(self, osu):
        """Request the mapper's profile; set a mode on the builder if needed."""
        return osu.user(self.creator_id)

    def get_global_leaderboard(self, osu):
        return osu.scores(self.beatmap_id).mode(self.mode)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Beatmap):
            return NotImplemented
        return self.beatmap_id == other.beatmap_id

    def __hash__(self) -> int:
        return hash(self.beatmap_id)

    def __str__(self) -> str:
        return f"{self.artist} - {self.title} [{self.version}]"
