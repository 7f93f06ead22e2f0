import pytest
import sys
import os
from typing import Callable

import httpx

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from osuv1.core.osu_api_client import Osu
from osuv1.core.rate_limiter import RateLimiter

TEST_API_KEY = "test-key"


@pytest.fixture(scope="function")
def beatmap_payload() -> dict:
    return {
        "approved": "1",
        "submit_date": "2013-05-15 11:32:26",
        "approved_date": "2013-07-06 08:54:46",
        "last_update": "2013-07-06 08:51:22",
        "artist": "Luxion",
        "beatmap_id": "252002",
        "beatmapset_id": "93398",
        "bpm": "196",
        "creator": "RikiH_",
        "creator_id": "686209",
        "difficultyrating": "5.744717597961426",
        "diff_aim": "2.7706098556518555",
        "diff_speed": "2.9062750339508057",
        "diff_size": "4",
        "diff_overall": "8",
        "diff_approach": "9",
        "diff_drain": "7",
        "hit_length": "114",
        "source": "BMS",
        "genre_id": "2",
        "language_id": "5",
        "title": "High-Priestess",
        "total_length": "146",
        "version": "Overkill",
        "file_md5": "c8f08438204abfcdd1a748ebfae67421",
        "mode": "0",
        "tags": "kloyd flower roxas",
        "favourite_count": "140",
        "rating": "9.44779",
        "playcount": "94637",
        "passcount": "10599",
        "count_normal": "388",
        "count_slider": "222",
        "count_spinner": "3",
        "max_combo": "899",
        "storyboard": "0",
        "video": "0",
        "download_unavailable": "0",
        "audio_unavailable": "0",
    }


@pytest.fixture(scope="function")
def score_payload() -> dict:
    return {
        "beatmap_id": "252002",
        "score_id": "2177560145",
        "score": "10433546",
        "username": "Cookiezi",
        "maxcombo": "899",
        "count50": "0",
        "count100": "3",
        "count300": "610",
        "countmiss": "0",
        "countkatu": "3",
        "countgeki": "184",
        "perfect": "1",
        "enabled_mods": "24",
        "user_id": "124493",
        "date": "2016-07-09 23:02:28",
        "rank": "XH",
        "pp": "687.288",
        "replay_available": "1",
    }


@pytest.fixture(scope="function")
def user_payload() -> dict:
    return {
        "user_id": "2",
        "username": "peppy",
        "join_date": "2007-08-28 03:09:12",
        "count300": "674108",
        "count100": "179941",
        "count50": "28107",
        "playcount": "7237",
        "ranked_score": "1270616637",
        "total_score": "3754285508",
        "pp_rank": "1007436",
        "level": "65.0426",
        "pp_raw": "4.63",
        "accuracy": "89.7542",
        "count_rank_ss": "7",
        "count_rank_ssh": "1",
        "count_rank_s": "49",
        "count_rank_sh": "3",
        "count_rank_a": "191",
        "country": "AU",
        "total_seconds_played": "605002",
        "pp_country_rank": "27412",
        "events": [
            {
                "display_html": "<b><a href='/u/2'>peppy</a></b> has joined osu!",
                "beatmap_id": None,
                "beatmapset_id": "",
                "date": "2020-01-01 12:00:00",
                "epicfactor": "1",
            }
        ],
    }


@pytest.fixture(scope="function")
def match_payload() -> dict:
    return {
        "match": {
            "match_id": "59599346",
            "name": "OWC: (United States) vs (South Korea)",
            "start_time": "2019-12-15 06:04:21",
            "end_time": "2019-12-15 07:56:58",
        },
        "games": [
            {
                "game_id": "311108404",
                "start_time": "2019-12-15 06:19:27",
                "end_time": "2019-12-15 06:22:48",
                "beatmap_id": "2216498",
                "play_mode": "0",
                "match_type": "0",
                "scoring_type": "3",
                "team_type": "2",
                "mods": "1",
                "scores": [
                    {
                        "slot": "0",
                        "team": "1",
                        "user_id": "4908650",
                        "score": "866432",
                        "maxcombo": "1066",
                        "rank": "0",
                        "count50": "0",
                        "count100": "16",
                        "count300": "748",
                        "countmiss": "1",
                        "countgeki": "139",
                        "countkatu": "10",
                        "perfect": "0",
                        "pass": "1",
                        "enabled_mods": None,
                    }
                ],
            }
        ],
    }


@pytest.fixture(scope="function")
def fast_rate_limiter() -> RateLimiter:
    return RateLimiter(max_calls=1000, period_seconds=1.0)


@pytest.fixture(scope="function")
def sent_requests() -> list:
    return []


@pytest.fixture(scope="function")
def make_osu(fast_rate_limiter: RateLimiter, sent_requests: list) -> Callable[..., Osu]:
    """Build a client whose transport answers with `handler`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> Osu:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        kwargs.setdefault("rate_limiter", fast_rate_limiter)
        return Osu(
            TEST_API_KEY,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)),
            **kwargs,
        )

    return factory
