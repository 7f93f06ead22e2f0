import pytest

from osuv1.core.errors import ModParsingError
from osuv1.models.enums import GameMode
from osuv1.models.mods import ALL_BITS, GameMods


def test_parse_text_renders_in_bit_order():
    mods = GameMods.from_str("HRHD")

    assert mods == GameMods.HIDDEN | GameMods.HARDROCK
    assert mods.bits == 0x18
    assert str(mods) == "HDHR"


def test_nightcore_hides_doubletime():
    mods = GameMods.from_bits(0x248)

    assert list(mods) == [GameMods.HIDDEN, GameMods.NIGHTCORE]
    assert str(mods) == "HDNC"
    assert len(mods) == 2


def test_unknown_bit_is_rejected():
    with pytest.raises(ModParsingError) as exc_info:
        GameMods.from_bits(0x80000000)

    assert exc_info.value.value == 0x80000000


def test_unknown_chunk_is_rejected():
    with pytest.raises(ModParsingError):
        GameMods.from_str("HDXX")


def test_companions_are_added_from_bits():
    assert GameMods.DOUBLETIME in GameMods.from_bits(0x200)
    assert GameMods.SUDDENDEATH in GameMods.from_bits(0x4000)


def test_nomod():
    assert GameMods.from_str("NOMOD") == GameMods.NOMOD
    assert GameMods.from_str("NM") == GameMods.NOMOD
    assert list(GameMods.NOMOD) == [GameMods.NOMOD]
    assert str(GameMods.NOMOD) == "NM"
    assert len(GameMods.NOMOD) == 0


def test_aliases_parse_to_the_same_mod():
    assert GameMods.from_str("RX") == GameMods.from_str("RL") == GameMods.RELAX
    assert GameMods.from_str("4K") == GameMods.from_str("K4") == GameMods.KEY4
    assert GameMods.from_str("hddt") == GameMods.HIDDEN | GameMods.DOUBLETIME


def test_key_bits_follow_upstream():
    assert GameMods.KEY1.bits == 1 << 26
    assert GameMods.KEY3.bits == 1 << 27
    assert GameMods.KEY2.bits == 1 << 28


def test_rendering_round_trips_for_every_single_bit():
    for shift in range(31):
        bit = 1 << shift
        if not bit & ALL_BITS:
            continue
        mods = GameMods.from_bits(bit | GameMods.HIDDEN.bits)
        assert GameMods.from_str(str(mods)) == mods


def test_iteration_never_yields_both_companions():
    mods = GameMods.from_bits(
        (GameMods.NIGHTCORE | GameMods.PERFECT | GameMods.FLASHLIGHT).bits
    )
    yielded = list(mods)

    assert GameMods.DOUBLETIME not in yielded
    assert GameMods.SUDDENDEATH not in yielded
    assert yielded == [GameMods.NIGHTCORE, GameMods.FLASHLIGHT, GameMods.PERFECT]


def test_has_key_mod_returns_lowest_key():
    mods = GameMods.KEY7 | GameMods.KEY2 | GameMods.HIDDEN

    assert mods.has_key_mod() == GameMods.KEY2
    assert GameMods.HIDDEN.has_key_mod() is None


def test_score_multiplier_per_mode():
    hdhr = GameMods.HIDDEN | GameMods.HARDROCK

    assert hdhr.score_multiplier(GameMode.STANDARD) == pytest.approx(1.06 * 1.06)
    assert GameMods.SPUNOUT.score_multiplier(GameMode.TAIKO) == 1.0
    assert GameMods.HARDROCK.score_multiplier(GameMode.CATCH) == pytest.approx(1.12)
    assert hdhr.score_multiplier(GameMode.MANIA) == 1.0
    assert GameMods.HALFTIME.score_multiplier(GameMode.MANIA) == 0.5

    nightcore = GameMods.from_bits(GameMods.NIGHTCORE.bits)
    assert nightcore.score_multiplier(GameMode.STANDARD) == pytest.approx(1.12)

    assert hdhr.increases_score(GameMode.STANDARD)
    assert GameMods.NOFAIL.decreases_score(GameMode.STANDARD)
    assert not GameMods.NOMOD.increases_score(GameMode.STANDARD)


def test_changes_stars():
    assert GameMods.DOUBLETIME.changes_stars(GameMode.MANIA)
    assert GameMods.HALFTIME.changes_stars(GameMode.TAIKO)
    assert GameMods.HARDROCK.changes_stars(GameMode.STANDARD)
    assert GameMods.EASY.changes_stars(GameMode.CATCH)
    assert not GameMods.HARDROCK.changes_stars(GameMode.TAIKO)
    assert not GameMods.HIDDEN.changes_stars(GameMode.STANDARD)


@pytest.mark.parametrize(
    "mods",
    [
        GameMods.NIGHTCORE | GameMods.PERFECT | GameMods.KEY4,
        GameMods.NIGHTCORE | GameMods.PERFECT | GameMods.KEY2 | GameMods.KEY3,
        GameMods.HIDDEN | GameMods.HARDROCK | GameMods.DOUBLETIME | GameMods.FLASHLIGHT,
        GameMods.EASY | GameMods.HALFTIME | GameMods.NOFAIL | GameMods.SPUNOUT,
        GameMods.KEY1 | GameMods.KEY9 | GameMods.KEYCOOP | GameMods.MIRROR | GameMods.RANDOM,
        GameMods.AUTOPLAY | GameMods.CINEMA | GameMods.SCOREV2 | GameMods.TARGET,
        GameMods.RELAX | GameMods.SUDDENDEATH | GameMods.FADEIN | GameMods.TOUCHDEVICE,
        GameMods.AUTOPILOT | GameMods.PERFECT | GameMods.KEY8,
    ],
)
def test_combinations_round_trip(mods):
    assert GameMods.from_str(str(mods)) == mods
    assert GameMods.from_bits(mods.bits) == mods


def test_every_pair_of_bits_round_trips():
    single_bits = [1 << shift for shift in range(31) if (1 << shift) & ALL_BITS]

    for index, first in enumerate(single_bits):
        for second in single_bits[index:]:
            mods = GameMods.from_bits(first | second)
            assert GameMods.from_str(str(mods)) == mods
            assert GameMods.from_bits(mods.bits) == mods
