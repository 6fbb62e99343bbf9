# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Entry point for manual matchday simulations."""
import argparse
import random
from pathlib import Path
from typing import List, Optional, Sequence

from fulltime.engine.match_engine import Fixture, MatchRatingEngine
from fulltime.engine.report import MatchReport
from fulltime.models.snapshot import SubRole
from fulltime.utils.debug import MatchDebugger
from fulltime.utils.generator import generate_fixtures  # Fallback if no fixtures file
from fulltime.utils.roster import load_fixtures_from_json  # For loading saved fixtures


def print_report(report: MatchReport) -> None:
    """Print one participant's rating, stat line and headline moments.

    Parameters
    ----------
    report : MatchReport
        Report produced by the engine.
    """
    result = report.result
    stats = report.stats
    print(f"\n#{report.participant_id} {report.name} rating {result.rating:.1f} [{result.band.value}]")
    print(
        f"  Involvement: {result.involvement.value} ({result.involvement_score:.1f} touches) "
        f"| Raw score: {result.raw_score:+.2f}"
    )
    print(
        f"  Goals {stats.goals} | Assists {stats.assists} | Shots {stats.shots} "
        f"| Passes {stats.passes_completed}/{stats.passes_attempted} "
        f"| Tackles {stats.tackles_won}/{stats.tackles_attempted} | Minutes {stats.minutes_played}"
    )
    for moment in report.summary():
        print(f"  {moment}")


def load_fixtures(path: Optional[str], count: int, role: Optional[SubRole], seed: Optional[int]) -> List[Fixture]:
    """Load fixtures from disk, falling back to generated ones.

    Parameters
    ----------
    path : Optional[str]
        Fixtures JSON file; ``None`` skips straight to generation.
    count : int
        Number of fixtures to generate when no file is used.
    role : Optional[SubRole]
        Role given to every generated participant; random when ``None``.
    seed : Optional[int]
        Seed for generated fixtures.

    Returns
    -------
    List[Fixture]
        Fixtures to simulate.
    """
    if path is not None:
        fixtures_file = Path(path)
        if fixtures_file.exists():
            return load_fixtures_from_json(str(fixtures_file))
        print(f"No fixtures file found at {fixtures_file}")
    print("Using generated fixtures...")
    roles = [role] if role is not None else None
    return generate_fixtures(count, roles=roles, rng=random.Random(seed))


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Simulate a matchday and print every participant's rating.

    Parameters
    ----------
    argv : Optional[Sequence[str]]
        Command-line arguments; ``sys.argv`` when ``None``.
    """
    parser = argparse.ArgumentParser(description="Simulate a matchday and rate each participant")
    parser.add_argument("--fixtures", type=str, default=None, help="Path to a fixtures JSON file")
    parser.add_argument("--count", type=int, default=5, help="Number of generated fixtures")
    parser.add_argument("--role", type=str, default=None, choices=[r.value for r in SubRole], help="Role code")
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated fixtures")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size")
    parser.add_argument("--debug", action="store_true", help="Write a rating debug log to debug_logs/")
    args = parser.parse_args(argv)

    role = SubRole(args.role) if args.role else None
    fixtures = load_fixtures(args.fixtures, args.count, role, args.seed)

    debugger = MatchDebugger() if args.debug else None
    engine = MatchRatingEngine(debugger=debugger)
    try:
        reports = engine.simulate_matchday(fixtures, max_workers=args.workers)
    finally:
        if debugger is not None:
            debugger.close()

    for report in reports:
        print_report(report)

    if reports:
        best = max(reports, key=lambda r: r.rating)
        print(f"\nPlayer of the matchday: {best.name} ({best.rating:.1f})")
    if debugger is not None and debugger.log_path is not None:
        print(f"\nDebug log written to {debugger.log_path}")


if __name__ == "__main__":
    main()
