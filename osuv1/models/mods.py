from enum import IntFlag
from enum import unique
from typing import Iterator
from typing import Optional

from osuv1.core.errors import ModParsingError
from osuv1.models.enums import GameMode

__all__ = ("GameMods",)


@unique
class GameMods(IntFlag):
    NOMOD = 0
    NOFAIL = 1 << 0
    EASY = 1 << 1
    TOUCHDEVICE = 1 << 2
    HIDDEN = 1 << 3
    HARDROCK = 1 << 4
    SUDDENDEATH = 1 << 5
    DOUBLETIME = 1 << 6
    RELAX = 1 << 7
    HALFTIME = 1 << 8
    NIGHTCORE = 1 << 9 | DOUBLETIME  # always carries DT
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUNOUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14 | SUDDENDEATH  # always carries SD
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADEIN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEYCOOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCOREV2 = 1 << 29
    MIRROR = 1 << 30

    @classmethod
    def from_bits(cls, bits: int) -> "GameMods":
        """\
        Build a mod combination from its upstream integer form.

        Unknown bits are rejected; NightCore and Perfect pull in
        their DoubleTime and SuddenDeath companions.
        """
        if isinstance(bits, bool) or bits < 0 or bits & ~ALL_BITS:
            raise ModParsingError(int(bits))

        if bits & NIGHTCORE_BIT:
            bits |= cls.DOUBLETIME.value
        if bits & PERFECT_BIT:
            bits |= cls.SUDDENDEATH.value

        return cls(bits)

    @classmethod
    def from_str(cls, s: str) -> "GameMods":
        # from fmt: `HDDTRX`
        upper = s.strip().upper()
        if upper == "NOMOD":
            return cls.NOMOD

        mods = 0
        _dict = modstr2mod_dict  # global

        # split into 2 character chunks
        for idx in range(0, len(upper), 2):
            chunk = upper[idx : idx + 2]
            if chunk not in _dict:
                raise ModParsingError(s)
            mods |= _dict[chunk]

        return cls(mods)

    @property
    def bits(self) -> int:
        return self.value

    def __iter__(self) -> Iterator["GameMods"]:
        """\
        Yield the contained mods in ascending bit order.

        NightCore hides DoubleTime and Perfect hides SuddenDeath,
        so each atomic mod comes out at most once. An empty
        combination yields NOMOD once.
        """
        if not self.value:
            yield GameMods.NOMOD
            return

        for shift in range(32):
            bit = 1 << shift

            if bit == SUDDENDEATH_BIT and PERFECT_BIT & self.value:
                continue
            if bit == DOUBLETIME_BIT and NIGHTCORE_BIT & self.value:
                continue

            if bit == NIGHTCORE_BIT and self.value & bit:
                yield GameMods.NIGHTCORE
            elif bit == PERFECT_BIT and self.value & bit:
                yield GameMods.PERFECT
            elif self.value & bit:
                yield GameMods(bit)

    def __len__(self) -> int:
        if not self.value:
            return 0
        return sum(1 for _ in self)

    def __str__(self) -> str:
        _dict = mod2modstr_dict  # global
        return "".join(_dict[mod] for mod in self)

    def __repr__(self) -> str:
        return f"<GameMods.{self}: {self.value}>"

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def has_key_mod(self) -> Optional["GameMods"]:
        """Return the lowest numbered mania key mod in the combination."""
        for mod in KEY_MODS_ORDERED:
            if mod in self:
                return mod
        return None

    def score_multiplier(self, mode: GameMode) -> float:
        table = SCORE_MULTIPLIERS[GameMode(mode)]

        multiplier = 1.0
        for mod in self:
            multiplier *= table.get(mod, 1.0)

        return multiplier

    def increases_score(self, mode: GameMode) -> bool:
        return self.score_multiplier(mode) > 1.0

    def decreases_score(self, mode: GameMode) -> bool:
        return self.score_multiplier(mode) < 1.0

    def changes_stars(self, mode: GameMode) -> bool:
        """Whether a beatmap's star rating in `mode` is affected."""
        if self.value & SPEED_CHANGING_MODS:
            return True
        if self.value & (GameMods.HARDROCK | GameMods.EASY):
            return mode in (GameMode.STANDARD, GameMode.CATCH)
        return False


ALL_BITS = 0
for _mod in GameMods:
    ALL_BITS |= _mod.value
for _mod in (GameMods.NIGHTCORE, GameMods.PERFECT):
    ALL_BITS |= _mod.value
del _mod

SUDDENDEATH_BIT = 1 << 5
DOUBLETIME_BIT = 1 << 6
NIGHTCORE_BIT = 1 << 9
PERFECT_BIT = 1 << 14

SPEED_CHANGING_MODS = GameMods.DOUBLETIME | GameMods.NIGHTCORE | GameMods.HALFTIME

KEY_MODS_ORDERED = (
    GameMods.KEY1,
    GameMods.KEY2,
    GameMods.KEY3,
    GameMods.KEY4,
    GameMods.KEY5,
    GameMods.KEY6,
    GameMods.KEY7,
    GameMods.KEY8,
    GameMods.KEY9,
)

modstr2mod_dict = {
    "NM": GameMods.NOMOD,
    "NF": GameMods.NOFAIL,
    "EZ": GameMods.EASY,
    "TD": GameMods.TOUCHDEVICE,
    "HD": GameMods.HIDDEN,
    "HR": GameMods.HARDROCK,
    "SD": GameMods.SUDDENDEATH,
    "DT": GameMods.DOUBLETIME,
    "RX": GameMods.RELAX,
    "RL": GameMods.RELAX,
    "HT": GameMods.HALFTIME,
    "NC": GameMods.NIGHTCORE,
    "FL": GameMods.FLASHLIGHT,
    "AU": GameMods.AUTOPLAY,
    "SO": GameMods.SPUNOUT,
    "AP": GameMods.AUTOPILOT,
    "PF": GameMods.PERFECT,
    "FI": GameMods.FADEIN,
    "RD": GameMods.RANDOM,
    "CN": GameMods.CINEMA,
    "TP": GameMods.TARGET,
    "CO": GameMods.KEYCOOP,
    "V2": GameMods.SCOREV2,
    "MR": GameMods.MIRROR,
    "1K": GameMods.KEY1,
    "2K": GameMods.KEY2,
    "3K": GameMods.KEY3,
    "4K": GameMods.KEY4,
    "5K": GameMods.KEY5,
    "6K": GameMods.KEY6,
    "7K": GameMods.KEY7,
    "8K": GameMods.KEY8,
    "9K": GameMods.KEY9,
    "K1": GameMods.KEY1,
    "K2": GameMods.KEY2,
    "K3": GameMods.KEY3,
    "K4": GameMods.KEY4,
    "K5": GameMods.KEY5,
    "K6": GameMods.KEY6,
    "K7": GameMods.KEY7,
    "K8": GameMods.KEY8,
    "K9": GameMods.KEY9,
}

mod2modstr_dict = {
    GameMods.NOMOD: "NM",
    GameMods.NOFAIL: "NF",
    GameMods.EASY: "EZ",
    GameMods.TOUCHDEVICE: "TD",
    GameMods.HIDDEN: "HD",
    GameMods.HARDROCK: "HR",
    GameMods.SUDDENDEATH: "SD",
    GameMods.DOUBLETIME: "DT",
    GameMods.RELAX: "RX",
    GameMods.HALFTIME: "HT",
    GameMods.NIGHTCORE: "NC",
    GameMods.FLASHLIGHT: "FL",
    GameMods.AUTOPLAY: "AU",
    GameMods.SPUNOUT: "SO",
    GameMods.AUTOPILOT: "AP",
    GameMods.PERFECT: "PF",
    GameMods.FADEIN: "FI",
    GameMods.RANDOM: "RD",
    GameMods.CINEMA: "CN",
    GameMods.TARGET: "TP",
    GameMods.KEYCOOP: "CO",
    GameMods.SCOREV2: "V2",
    GameMods.MIRROR: "MR",
    GameMods.KEY1: "1K",
    GameMods.KEY2: "2K",
    GameMods.KEY3: "3K",
    GameMods.KEY4: "4K",
    GameMods.KEY5: "5K",
    GameMods.KEY6: "6K",
    GameMods.KEY7: "7K",
    GameMods.KEY8: "8K",
    GameMods.KEY9: "9K",
}

SCORE_MULTIPLIERS: dict[GameMode, dict[GameMods, float]] = {
    GameMode.STANDARD: {
        GameMods.HALFTIME: 0.3,
        GameMods.EASY: 0.5,
        GameMods.NOFAIL: 0.5,
        GameMods.SPUNOUT: 0.9,
        GameMods.HARDROCK: 1.06,
        GameMods.HIDDEN: 1.06,
        GameMods.DOUBLETIME: 1.12,
        GameMods.NIGHTCORE: 1.12,
        GameMods.FLASHLIGHT: 1.12,
    },
    GameMode.TAIKO: {
        GameMods.HALFTIME: 0.3,
        GameMods.EASY: 0.5,
        GameMods.NOFAIL: 0.5,
        GameMods.HARDROCK: 1.06,
        GameMods.HIDDEN: 1.06,
        GameMods.DOUBLETIME: 1.12,
        GameMods.NIGHTCORE: 1.12,
        GameMods.FLASHLIGHT: 1.12,
    },
    GameMode.CATCH: {
        GameMods.HALFTIME: 0.3,
        GameMods.EASY: 0.5,
        GameMods.NOFAIL: 0.5,
        GameMods.DOUBLETIME: 1.06,
        GameMods.NIGHTCORE: 1.06,
        GameMods.HIDDEN: 1.06,
        GameMods.HARDROCK: 1.12,
        GameMods.FLASHLIGHT: 1.12,
    },
    GameMode.MANIA: {
        GameMods.EASY: 0.5,
        GameMods.NOFAIL: 0.5,
        GameMods.HALFTIME: 0.5,
    },
}
