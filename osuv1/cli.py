import argparse
import asyncio
import json
import logging
from typing import Optional, Sequence, Union

from osuv1.core.config import settings
from osuv1.core.errors import OsuError
from osuv1.core.osu_api_client import Osu
from osuv1.models.enums import GameMode
from osuv1.models.mods import GameMods

MODE_CHOICES = [str(mode) for mode in GameMode]


def _user(value: str) -> Union[int, str]:
    return int(value) if value.isdigit() else value


def _mode(value: str) -> GameMode:
    mode = GameMode.from_wire(value)
    if mode is None:
        raise argparse.ArgumentTypeError(f"unknown mode {value!r}")
    return mode


def _mods(value: str) -> GameMods:
    try:
        if value.isdigit():
            return GameMods.from_bits(int(value))
        return GameMods.from_str(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _dump(result) -> object:
    if result is None:
        return None
    if isinstance(result, list):
        return [_dump(item) for item in result]
    return result.model_dump(mode="json", by_alias=True)


def build_request(osu: Osu, args: argparse.Namespace):
    if args.command == "user":
        request = osu.user(args.user)
        if args.event_days is not None:
            request.event_days(args.event_days)
    elif args.command == "beatmap":
        request = osu.beatmaps() if args.all else osu.beatmap()
        if args.map_id is not None:
            request.map_id(args.map_id)
        if args.mapset_id is not None:
            request.mapset_id(args.mapset_id)
        if args.hash is not None:
            request.hash(args.hash)
        if args.mods is not None:
            request.mods(args.mods)
    elif args.command == "scores":
        request = osu.scores(args.map_id)
        if args.user is not None:
            request.user(args.user)
        if args.mods is not None:
            request.mods(args.mods)
    elif args.command in ("best", "recent"):
        if args.command == "best":
            request = osu.top_scores(args.user)
        else:
            request = osu.recent_scores(args.user)
    elif args.command == "match":
        return osu.osu_match(args.match_id)
    else:
        raise ValueError(f"unknown command {args.command!r}")

    if getattr(args, "limit", None) is not None:
        request.limit(args.limit)
    if args.mode is not None:
        request.mode(args.mode)
    return request


async def run(args: argparse.Namespace) -> object:
    async with Osu.builder(args.key).timeout(args.timeout).build() as osu:
        return _dump(await build_request(osu, args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the osu! v1 api and print JSON.")
    parser.add_argument("--key", default=settings.OSU_API_KEY, help="API key (default: $OSU_API_KEY).")
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.OSU_API_TIMEOUT,
        help="Request timeout in seconds (default: 10).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    mode_parent = argparse.ArgumentParser(add_help=False)
    mode_parent.add_argument("--mode", type=_mode, help=f"One of {', '.join(MODE_CHOICES)}.")

    user_parser = subparsers.add_parser("user", parents=[mode_parent], help="Show a user profile.")
    user_parser.add_argument("user", type=_user, help="User id or name.")
    user_parser.add_argument("--event-days", type=int, help="Max event age in days (1-31).")

    beatmap_parser = subparsers.add_parser("beatmap", parents=[mode_parent], help="Show beatmaps.")
    beatmap_parser.add_argument("--map-id", type=int)
    beatmap_parser.add_argument("--mapset-id", type=int)
    beatmap_parser.add_argument("--hash", help="Beatmap md5.")
    beatmap_parser.add_argument("--mods", type=_mods, help="Mods as bits or abbreviations, e.g. HDDT.")
    beatmap_parser.add_argument("--limit", type=int, help="Amount of maps (max 500).")
    beatmap_parser.add_argument("--all", action="store_true", help="Print every beatmap instead of the first.")

    scores_parser = subparsers.add_parser("scores", parents=[mode_parent], help="Show scores on a map.")
    scores_parser.add_argument("map_id", type=int)
    scores_parser.add_argument("--user", type=_user, help="Only scores of this user.")
    scores_parser.add_argument("--mods", type=_mods)
    scores_parser.add_argument("--limit", type=int, help="Amount of scores (1-100).")

    for name, help_text, limit_help in (
        ("best", "Show the top scores of a user.", "max 100"),
        ("recent", "Show the recent scores of a user.", "max 50"),
    ):
        user_score_parser = subparsers.add_parser(name, parents=[mode_parent], help=help_text)
        user_score_parser.add_argument("user", type=_user, help="User id or name.")
        user_score_parser.add_argument("--limit", type=int, help=f"Amount of scores ({limit_help}).")

    match_parser = subparsers.add_parser("match", help="Show a multiplayer match.")
    match_parser.add_argument("match_id", type=int)
    match_parser.set_defaults(mode=None)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.key:
        parser.error("an api key is required, pass --key or set OSU_API_KEY")

    try:
        result = asyncio.run(run(args))
    except OsuError as e:
        logging.getLogger(__name__).error(f"Request failed: {e}")
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
