#!/usr/bin/env python3
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
"""
Analyze rating debug logs to spot calibration problems.

Usage:
    python tools/analyze_rating_log.py <log_file_path>
"""

import re
import sys
from collections import Counter, defaultdict
from pathlib import Path

LINE_PATTERN = re.compile(r"^\[[\d:]+\] (\w+): (.+)$")


def parse_log_file(log_path):
    """Parse the debug log and extract per-stage records."""
    event_types = Counter()
    outcomes = defaultdict(Counter)
    impacts = defaultdict(list)
    aggregates = []
    ratings = []
    errors = Counter()

    with open(log_path, "r", encoding="utf-8") as f:
        for line in f:
            match = LINE_PATTERN.search(line.strip())
            if not match:
                continue
            kind, details = match.groups()

            if kind == "MATCH_EVENT":
                event_match = re.search(r"Event: (\w+) \| Details: #\d+ \w+ (ok|failed)", details)
                if event_match:
                    event_type, outcome = event_match.groups()
                    event_types[event_type] += 1
                    outcomes[event_type][outcome] += 1

            elif kind == "IMPACT":
                impact_match = re.search(r"Event: (\w+) \|.*final=([+-][\d.]+)", details)
                if impact_match:
                    impacts[impact_match.group(1)].append(float(impact_match.group(2)))

            elif kind == "AGGREGATE":
                agg_match = re.search(r"involvement=([\d.]+) \((\w+)\) cap=(\S+) raw=([+-][\d.]+)", details)
                if agg_match:
                    score, level, cap, raw = agg_match.groups()
                    aggregates.append((float(score), level, None if cap == "None" else float(cap), float(raw)))

            elif kind == "RATING":
                rating_match = re.search(r"raw=([+-][\d.]+) rating=([\d.]+) band=(\w+)", details)
                if rating_match:
                    raw, rating, band = rating_match.groups()
                    ratings.append((float(raw), float(rating), band))

            elif kind == "ERROR":
                error_match = re.search(r"Type: (\w+)", details)
                if error_match:
                    errors[error_match.group(1)] += 1

    return {
        "event_types": event_types,
        "outcomes": outcomes,
        "impacts": impacts,
        "aggregates": aggregates,
        "ratings": ratings,
        "errors": errors,
    }


def analyze_success_rates(outcomes):
    """Report success rates of attempted actions."""
    print("\n=== SUCCESS RATES ===")
    for event_type, counts in sorted(outcomes.items()):
        failed = counts["failed"]
        if not failed:
            continue
        total = counts["ok"] + failed
        rate = counts["ok"] / total * 100
        print(f"  {event_type}: {rate:.1f}% of {total}")
        if rate > 95:
            print(f"  ⚠️  {event_type} almost never fails - success bounds may be too generous")


def analyze_impacts(impacts):
    """Report the average impact of each event type."""
    print("\n=== IMPACT ANALYSIS ===")
    if not impacts:
        print("  ⚠️  No impact lines found")
        return
    ranked = sorted(impacts.items(), key=lambda item: -abs(sum(item[1])))
    for event_type, values in ranked[:15]:
        avg = sum(values) / len(values)
        print(f"  {event_type}: total {sum(values):+.2f}, avg {avg:+.3f} over {len(values)}")


def analyze_involvement(aggregates):
    """Report involvement levels and how often the ceiling bites."""
    print("\n=== INVOLVEMENT ANALYSIS ===")
    print(f"Total aggregations: {len(aggregates)}")
    if not aggregates:
        return
    levels = Counter(level for _, level, _, _ in aggregates)
    for level, count in levels.most_common():
        print(f"  {level}: {count}")
    capped = sum(1 for _, _, cap, raw in aggregates if cap is not None and raw >= cap)
    print(f"  Capped by involvement: {capped} ({capped / len(aggregates) * 100:.1f}%)")


def analyze_ratings(ratings):
    """Report the rating distribution."""
    print("\n=== RATING DISTRIBUTION ===")
    print(f"Total ratings: {len(ratings)}")
    if not ratings:
        return
    values = [rating for _, rating, _ in ratings]
    avg = sum(values) / len(values)
    print(f"  Average rating: {avg:.2f} (min {min(values):.1f}, max {max(values):.1f})")
    bands = Counter(band for _, _, band in ratings)
    for band, count in bands.most_common():
        print(f"  {band}: {count}")
    if avg < 6.0 or avg > 7.2:
        print("  ⚠️  Average rating is outside the usual 6.0-7.2 range - check calibration")


def main():
    if len(sys.argv) < 2:
        print("Usage: python tools/analyze_rating_log.py <log_file_path>")
        print("\nExample:")
        print("  python tools/analyze_rating_log.py debug_logs/rating_debug_20251117_222236.txt")
        sys.exit(1)

    log_path = Path(sys.argv[1])

    if not log_path.exists():
        print(f"Error: Log file not found: {log_path}")
        sys.exit(1)

    print(f"Analyzing: {log_path.name}")
    print("=" * 60)

    data = parse_log_file(log_path)

    print("\n=== EVENT SUMMARY ===")
    for event_type, count in data["event_types"].most_common(15):
        print(f"  {event_type}: {count}")

    analyze_success_rates(data["outcomes"])
    analyze_impacts(data["impacts"])
    analyze_involvement(data["aggregates"])
    analyze_ratings(data["ratings"])

    if data["errors"]:
        print("\n=== ERRORS ===")
        for error_type, count in data["errors"].most_common():
            print(f"  {error_type}: {count}")

    print("\n" + "=" * 60)
    print("Analysis complete!")


if __name__ == "__main__":
    main()
