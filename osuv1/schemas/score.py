import math
import sys
from datetime import timedelta
from typing import ClassVar, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from osuv1.models.enums import GameMode, Grade
from osuv1.models.mods import GameMods
from osuv1.schemas.fields import (
    U32,
    UNREPORTED_DATE,
    Bool,
    Date,
    GradeField,
    MaybeBool,
    MaybeF32,
    MaybeStr,
    MaybeU32,
    MaybeU64,
    Mods,
)


class Score(BaseModel):
    """\
    A play as returned by `get_scores`, `get_user_best`, and
    `get_user_recent`.

    Upstream emits the same play with slightly shifted timestamps
    across endpoints, so two scores are equal when user and score
    match and their dates are at most `date_tolerance` apart.
    """

    model_config = ConfigDict(extra="ignore")

    date_tolerance: ClassVar[timedelta] = timedelta(seconds=2)

    beatmap_id: MaybeU32 = None
    score_id: MaybeU64 = None
    score: U32 = 0
    user_id: U32 = 0
    username: MaybeStr = None
    count300: U32 = 0
    count100: U32 = 0
    count50: U32 = 0
    count_miss: U32 = Field(default=0, validation_alias=AliasChoices("count_miss", "countmiss"))
    count_geki: U32 = Field(default=0, validation_alias=AliasChoices("count_geki", "countgeki"))
    count_katu: U32 = Field(default=0, validation_alias=AliasChoices("count_katu", "countkatu"))
    max_combo: U32 = Field(default=0, validation_alias=AliasChoices("max_combo", "maxcombo"))
    perfect: Bool = False
    enabled_mods: Mods = GameMods.NOMOD
    date: Date = UNREPORTED_DATE
    grade: GradeField = Field(default=Grade.F, validation_alias=AliasChoices("grade", "rank"))
    pp: MaybeF32 = None
    replay_available: MaybeBool = None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Score):
            return NotImplemented
        if self.user_id != other.user_id or self.score != other.score:
            return False
        return abs(self.date - other.date) <= self.date_tolerance

    def __hash__(self) -> int:
        return hash((self.user_id, self.score))

    def get_user(self, osu):
        return osu.user(self.user_id)

    def total_hits(self, mode: GameMode) -> int:
        """Count the judged hitobjects of the score for the given mode."""
        amount = self.count300 + self.count100 + self.count_miss

        if mode != GameMode.TAIKO:
            amount += self.count50

            if mode != GameMode.STANDARD:
                amount += self.count_katu

                if mode != GameMode.CATCH:
                    amount += self.count_geki

        return amount

    def accuracy(self, mode: GameMode) -> float:
        """Accuracy in percent, rounded to two decimals."""
        total = self.total_hits(mode)

        if total == 0:
            return 0.0

        if mode == GameMode.TAIKO:
            numerator = 0.5 * self.count100 + self.count300
            denominator = float(total)
        elif mode == GameMode.CATCH:
            numerator = float(self.count300 + self.count100 + self.count50)
            denominator = float(total)
        else:
            numerator = float(
                self.count50 * 50 + self.count100 * 100 + self.count300 * 300
            )
            if mode == GameMode.MANIA:
                numerator += self.count_katu * 200 + self.count_geki * 300
            denominator = total * 300.0

        # round half away from zero
        return math.floor(10_000.0 * numerator / denominator + 0.5) / 100.0

    def recalculate_grade(
        self, mode: GameMode, accuracy: Optional[float] = None
    ) -> Grade:
        """\
        Recompute, store, and return the grade of the score.

        Assumes the score is a full pass. `accuracy` is only used for
        non-standard modes and is computed when not given.
        """
        passed_objects = self.total_hits(mode)

        if mode == GameMode.STANDARD:
            grade = self._osu_grade(passed_objects)
        elif mode == GameMode.MANIA:
            grade = self._mania_grade(passed_objects, accuracy)
        elif mode == GameMode.TAIKO:
            grade = self._taiko_grade(passed_objects, accuracy)
        else:
            grade = self._catch_grade(accuracy)

        self.grade = grade
        return grade

    def _silver(self, regular: Grade, silver: Grade) -> Grade:
        return silver if GameMods.HIDDEN in self.enabled_mods else regular

    def _osu_grade(self, passed_objects: int) -> Grade:
        if self.count300 == passed_objects:
            return self._silver(Grade.X, Grade.XH)

        ratio300 = self.count300 / passed_objects
        ratio50 = self.count50 / passed_objects

        if ratio300 > 0.9 and ratio50 < 0.01 and self.count_miss == 0:
            return self._silver(Grade.S, Grade.SH)
        if ratio300 > 0.9 or (ratio300 > 0.8 and self.count_miss == 0):
            return Grade.A
        if ratio300 > 0.8 or (ratio300 > 0.7 and self.count_miss == 0):
            return Grade.B
        if ratio300 > 0.6:
            return Grade.C
        return Grade.D

    def _mania_grade(self, passed_objects: int, accuracy: Optional[float]) -> Grade:
        if self.count_geki == passed_objects:
            return self._silver(Grade.X, Grade.XH)

        if accuracy is None:
            accuracy = self.accuracy(GameMode.MANIA)

        if accuracy > 95.0:
            return self._silver(Grade.S, Grade.SH)
        if accuracy > 90.0:
            return Grade.A
        if accuracy > 80.0:
            return Grade.B
        if accuracy > 70.0:
            return Grade.C
        return Grade.D

    def _taiko_grade(self, passed_objects: int, accuracy: Optional[float]) -> Grade:
        if self.count300 == passed_objects:
            return self._silver(Grade.X, Grade.XH)

        if accuracy is None:
            accuracy = self.accuracy(GameMode.TAIKO)

        if accuracy > 95.0:
            return self._silver(Grade.S, Grade.SH)
        if accuracy > 90.0:
            return Grade.A
        if accuracy > 80.0:
            return Grade.B
        return Grade.C

    def _catch_grade(self, accuracy: Optional[float]) -> Grade:
        if accuracy is None:
            accuracy = self.accuracy(GameMode.CATCH)

        if abs(100.0 - accuracy) <= sys.float_info.epsilon:
            return self._silver(Grade.X, Grade.XH)
        if accuracy > 98.0:
            return self._silver(Grade.S, Grade.SH)
        if accuracy > 94.0:
            return Grade.A
        if accuracy > 90.0:
            return Grade.B
        if accuracy > 85.0:
            return Grade.C
        return Grade.D
