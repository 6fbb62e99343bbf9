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
"""Structured logging utilities used to trace rating runs."""
import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple


class MatchDebugger:
    """Helper object that records structured rating telemetry.

    Lines are kept in a bounded in-memory buffer and, when an output
    directory is configured, streamed to a per-session file. All writes are
    serialised so one debugger can be shared by concurrent match runs.

    Parameters
    ----------
    output_dir : str | None, default="debug_logs"
        Directory where new session logs are created; created automatically
        when missing. ``None`` keeps the log in memory only.
    max_recent : int, default=200
        Number of recent lines retained for :meth:`get_recent_events`.
    """

    def __init__(self, output_dir: Optional[str] = "debug_logs", max_recent: int = 200) -> None:
        """Initialise the debugger and start the first logging session.

        Parameters
        ----------
        output_dir : str | None
            Filesystem directory where log files are created, or ``None``
            for an in-memory debugger.
        max_recent : int
            Number of recent lines retained in memory.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=max_recent)
        self.start_new_session()

    def start_new_session(self) -> None:
        """Start a new debug logging session."""
        with self._lock:
            if self.log_file:
                self.log_file.close()
                self.log_file = None
            if self.output_dir is None:
                return
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.log_path = self.output_dir / f"rating_debug_{self.session_start}.txt"
            self.log_file = open(self.log_path, "w", encoding="utf-8")
            self.log_file.write(f"=== Rating Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_match_event(self, clock: str, event_type: str, description: str) -> None:
        """Log a generated match event.

        Parameters
        ----------
        clock : str
            Match clock label such as ``"45+2'"``.
        event_type : str
            Event type value, for example ``"goal"``.
        description : str
            Human-readable summary of the event.
        """
        self._write_log("MATCH_EVENT", f"Clock: {clock} | Event: {event_type} | Details: {description}")

    def log_impact(self, clock: str, event_type: str, description: str) -> None:
        """Log the impact breakdown of a scored event.

        Parameters
        ----------
        clock : str
            Match clock label of the event.
        event_type : str
            Event type value.
        description : str
            Formatted multipliers and final impact.
        """
        self._write_log("IMPACT", f"Clock: {clock} | Event: {event_type} | {description}")

    def log_aggregate(self, description: str) -> None:
        """Log the aggregation totals of a match.

        Parameters
        ----------
        description : str
            Formatted totals, involvement and raw score.
        """
        self._write_log("AGGREGATE", description)

    def log_rating(self, description: str) -> None:
        """Log a normalized rating.

        Parameters
        ----------
        description : str
            Formatted raw score, rating and band.
        """
        self._write_log("RATING", description)

    def log_error(self, error_type: str, description: str) -> None:
        """Log an error or warning.

        Parameters
        ----------
        error_type : str
            Label describing the error classification.
        description : str
            Human-readable explanation of the issue.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, event_type: str, details: str) -> None:
        """Write a log entry to the buffer and, when open, the session file.

        Parameters
        ----------
        event_type : str
            Category label for the log entry.
        details : str
            Formatted message body to persist.
        """
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {event_type}: {details}"

        with self._lock:
            line_no = self._line_number
            self._line_number += 1
            self._recent_events.append((line_no, log_entry))

            if self.log_file:
                self.log_file.write(f"{log_entry}\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest debug entries with line numbers.

        Parameters
        ----------
        limit : int
            Maximum number of entries to return.

        Returns
        -------
        List[str]
            Up to ``limit`` most recent log lines with prefixed line numbers.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:]
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file."""
        with self._lock:
            if self.log_file:
                self.log_file.close()
                self.log_file = None
