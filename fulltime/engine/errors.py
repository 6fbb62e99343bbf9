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
"""Exception hierarchy raised by the rating engine.

Input problems surface as :class:`InputValidationError` subclasses before a
single event is generated. Broken internal guarantees surface as
:class:`InternalInvariantError` so a wrong rating is never produced silently.
"""
from __future__ import annotations

from typing import Optional


class InputValidationError(ValueError):
    """Base class for malformed snapshots or match contexts.

    Parameters
    ----------
    message : str
        Human-readable explanation of the rejected input.
    field : str | None, optional
        Name of the offending field when a single field is at fault.
    value : object, optional
        The rejected value, kept for diagnostics.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: object = None) -> None:
        """Store the failing field alongside the message.

        Parameters
        ----------
        message : str
            Human-readable explanation of the rejected input.
        field : str | None, optional
            Name of the offending field when a single field is at fault.
        value : object, optional
            The rejected value, kept for diagnostics.
        """
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidSnapshot(InputValidationError):
    """Raised when a participant snapshot holds an out-of-range value.

    Parameters
    ----------
    message : str
        Human-readable explanation of the rejected input.
    field : str | None, optional
        Dotted path of the attribute that failed validation.
    value : object, optional
        The rejected value.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: object = None) -> None:
        """Create the error for a rejected snapshot field.

        Parameters
        ----------
        message : str
            Human-readable explanation of the rejected input.
        field : str | None, optional
            Dotted path of the attribute that failed validation.
        value : object, optional
            The rejected value.
        """
        super().__init__(message, field, value)


class EmptyContext(InputValidationError):
    """Raised for a zero-duration or otherwise malformed match context.

    Parameters
    ----------
    message : str
        Human-readable explanation of the rejected context.
    field : str | None, optional
        Context field that failed validation.
    value : object, optional
        The rejected value.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: object = None) -> None:
        """Create the error for a rejected match context.

        Parameters
        ----------
        message : str
            Human-readable explanation of the rejected context.
        field : str | None, optional
            Context field that failed validation.
        value : object, optional
            The rejected value.
        """
        super().__init__(message, field, value)


class InternalInvariantError(RuntimeError):
    """Raised when the pipeline detects a state it should never produce.

    Examples are an event timed before the first minute or an event log
    whose minutes run backwards.

    Parameters
    ----------
    message : str
        Description of the violated invariant.
    """

    def __init__(self, message: str) -> None:
        """Create the error with a description of the broken invariant.

        Parameters
        ----------
        message : str
            Description of the violated invariant.
        """
        super().__init__(message)
