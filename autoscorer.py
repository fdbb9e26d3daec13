#!/usr/bin/env python3
"""
Premier League Fantasy Autoscorer CLI

Scores the stored squad for one gameweek from exported fixture data and,
optionally, plays the head-to-head against the stored rival.

Usage:
    python autoscorer.py --fixtures exports/matches.json --gameweek 12
    python autoscorer.py -f exports/matches.json -p exports/teams.json --h2h --new-rival
    python autoscorer.py -f exports/matches.json --h2h --import-code <share code>
    python autoscorer.py --share
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from premfantasy import (
    GameweekLedger,
    JsonStore,
    RivalComparator,
    RosterManager,
    ScoringRuleSet,
    detect_current_matchday,
    encode_roster_code,
    load_fixtures,
    load_players,
)
from premfantasy.config import get_data_dir, get_history_limit, get_log_dir, get_max_gameweek
from premfantasy.logging_config import setup_logging
from premfantasy.reports import gameweek_table, season_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Premier League fantasy gameweek autoscorer")
    parser.add_argument(
        "--fixtures", "-f",
        default=None,
        help="Path to a matches export ({'matches': [...]} or a list)",
    )
    parser.add_argument(
        "--players", "-p",
        default=None,
        help="Path to a teams/players export (needed to generate a rival)",
    )
    parser.add_argument(
        "--gameweek", "-w",
        type=int,
        default=None,
        help="Gameweek to score (detected from fixture dates when omitted)",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default=None,
        help="Directory holding squad, rules and score records",
    )
    parser.add_argument(
        "--h2h",
        action="store_true",
        help="Play the head-to-head against the stored rival",
    )
    parser.add_argument(
        "--new-rival",
        action="store_true",
        help="Generate a fresh rival from the player pool before the head-to-head",
    )
    parser.add_argument(
        "--import-code",
        default=None,
        help="Import a friend's share code as the rival",
    )
    parser.add_argument(
        "--share",
        action="store_true",
        help="Print a share code for the stored squad",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for rival generation",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logger = setup_logging(
        log_dir=get_log_dir(),
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=False,
    )

    store = JsonStore(Path(args.data_dir) if args.data_dir else get_data_dir())
    manager = RosterManager(store)
    roster = manager.load()

    if args.share:
        print(encode_roster_code(roster, roster.captain_id, label="Me"))
        return 0

    if not args.fixtures:
        print("❌ --fixtures is required to score a gameweek")
        return 1

    fixtures_path = Path(args.fixtures)
    if not fixtures_path.exists():
        print(f"❌ Fixtures file not found: {fixtures_path}")
        return 1

    if len(roster) == 0:
        print("⚠️  No squad stored yet - draft players before scoring.")
        return 0

    all_fixtures = load_fixtures(fixtures_path)
    gameweek = args.gameweek or detect_current_matchday(all_fixtures)
    if not 1 <= gameweek <= get_max_gameweek():
        print(f"❌ Gameweek {gameweek} is outside 1-{get_max_gameweek()}")
        return 1
    fixtures = [f for f in all_fixtures if f.matchday in (None, gameweek)]

    rules = ScoringRuleSet(store).get_active_rules()
    ledger = GameweekLedger(store)

    print(f"Scoring GW{gameweek} ({len(fixtures)} fixtures)...")
    scores = ledger.score_and_store_gameweek(gameweek, roster, fixtures, rules)

    if not args.quiet:
        print(gameweek_table(scores))

    print(f"\n  GW{gameweek} TOTAL: {sum(s.total_points for s in scores.values())} pts")
    print(f"  SEASON TOTAL: {ledger.season_total(get_max_gameweek())} pts")
    if not args.quiet and len(ledger.stored_gameweeks()) > 1:
        print(season_table(ledger, get_max_gameweek()))

    if args.h2h or args.new_rival or args.import_code:
        rng = random.Random(args.seed)
        comparator = RivalComparator(store, rng=rng, history_limit=get_history_limit())

        if args.import_code:
            _, error = comparator.import_friend_roster(args.import_code)
            if error:
                print(f"❌ {error}")
                return 1
        elif args.new_rival:
            if not args.players:
                print("❌ --players is required to generate a rival")
                return 1
            comparator.generate_opponent(load_players(args.players), roster)

        outcome = comparator.play_gameweek(gameweek, roster, fixtures, rules)
        if outcome is None:
            print("⚠️  No rival stored - use --new-rival or --import-code.")
            return 0

        record = comparator.get_record()
        print("\n" + "=" * 60)
        print(f"HEAD TO HEAD: {outcome.score_a} - {outcome.score_b} ({outcome.result.upper()})")
        print(f"Record: W{record.wins} D{record.draws} L{record.losses}")
        print("=" * 60)

    logger.debug("Autoscorer finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
