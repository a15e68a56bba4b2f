from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from collections import Counter
from typing import Any, Dict, List

from .arena import GameResult, Match, Replay
from .bots import BOT_KINDS, make_bot
from .config import ENV_PREFIX, EngineConfig, MatchConfig, load_engine_config
from .data import standard_tiles
from .errors import ReplayError
from .tilebag import RandomTileBag
from .types import Player


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="python -m carcassonne_ai.cli",
        description="Carcassonne rules engine and bots",
    )
    p.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ...")
    sub = p.add_subparsers(dest="cmd")

    # play
    pl = sub.add_parser("play", help="Play one match between bots")
    _add_common_args(pl)
    pl.add_argument("--record", type=str, default=None, help="Write a JSON replay to this path")

    # replay
    rp = sub.add_parser("replay", help="Re-run a recorded match and print its scores")
    rp.add_argument("path", type=str)

    # bench
    bn = sub.add_parser("bench", help="Play many matches and report win counts")
    _add_common_args(bn)
    bn.add_argument("--games", type=int, default=10)
    bn.add_argument("--out", type=str, default=None, help="Save benchmark JSON")

    args = p.parse_args(argv)
    if getattr(args, "cmd", None) is None:
        p.print_help()
        sys.exit(2)
    return args


def _add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument(
        "--bot",
        action="append",
        default=[],
        metavar="PLAYER=KIND",
        help=f"Seat a bot, e.g. White=greedy (kinds: {', '.join(BOT_KINDS)})",
    )
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--depth", type=int, default=None, help="Playouts per move for shallow bots")
    ap.add_argument("--iterations", type=int, default=None, help="Search iterations for mcts bots")
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--config", type=str, action="append", default=[], help="YAML/JSON config files (merged)")
    ap.add_argument("--env-prefix", type=str, default=ENV_PREFIX, help="Env prefix for overrides")


def _parse_player(name: str) -> Player:
    for player in Player:
        if player.value.lower() == name.strip().lower():
            return player
    raise SystemExit(f"unknown player: {name!r}")


def _load(args: argparse.Namespace) -> tuple[EngineConfig, MatchConfig]:
    overrides: Dict[str, Any] = {"match": {}}
    if args.seed is not None:
        overrides["match"]["seed"] = args.seed
    if args.bot:
        seats = {}
        for seat in args.bot:
            player, _, kind = seat.partition("=")
            seats[player] = kind or "random"
        overrides["match"]["bots"] = seats
    params = {k: getattr(args, k) for k in ("depth", "iterations", "workers") if getattr(args, k) is not None}
    if params:
        overrides["match"]["bot_params"] = {"*": params}
    return load_engine_config(args.config, prefix=args.env_prefix, overrides=overrides)


def _build_bots(match: MatchConfig, seed: int | None) -> List[Any]:
    bots = []
    shared = dict(match.bot_params.get("*", {}))
    for offset, (name, kind) in enumerate(sorted(match.bots.items())):
        player = _parse_player(name)
        params = dict(shared)
        params.update(match.bot_params.get(kind, {}))
        if seed is not None:
            params["seed"] = seed + offset + 1
        bots.append(make_bot(kind, player, **params))
    return bots


def _play_once(engine: EngineConfig, match: MatchConfig, seed: int | None, record: str | None) -> GameResult:
    bots = _build_bots(match, seed)
    bag = RandomTileBag(standard_tiles(engine.tiles_path), seed=seed)
    return Match.play(bots, bag=bag, record=record, meeples_per_player=engine.meeples_per_player)


def _print_result(result: GameResult) -> None:
    winners = ", ".join(p.value for p in sorted(result.get_winners()))
    print(f"Winners: {winners}")
    for player, score in result.ranking():
        print(f"Player: {player.value}  Score: {score}")


def _bench(args: argparse.Namespace) -> Dict[str, Any]:
    engine, match = _load(args)
    base_seed = match.seed if match.seed is not None else 0
    wins: Counter = Counter()
    totals: Counter = Counter()
    t0 = time.perf_counter()
    for game in range(int(args.games)):
        result = _play_once(engine, match, base_seed + game, None)
        for player in result.get_winners():
            wins[player.value] += 1
        for player, score in result.player_scores.items():
            totals[player.value] += score
    elapsed = max(1e-9, time.perf_counter() - t0)
    games = max(1, int(args.games))
    return {
        "games": int(args.games),
        "bots": dict(match.bots),
        "wins": dict(wins),
        "mean_score": {p: totals[p] / games for p in totals},
        "games_per_sec": int(args.games) / elapsed,
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "play":
        engine, match = _load(args)
        result = _play_once(engine, match, match.seed, args.record or match.record)
        _print_result(result)
        return 0

    if args.cmd == "replay":
        try:
            result = Replay.from_path(args.path).replay()
        except ReplayError as exc:
            print(f"replay failed: {exc}", file=sys.stderr)
            return 1
        _print_result(result)
        return 0

    if args.cmd == "bench":
        out = _bench(args)
        if args.out:
            with open(args.out, "w", encoding="utf-8") as f:
                json.dump(out, f, indent=2)
        print(out)
        return 0

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
