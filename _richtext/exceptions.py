# Copyright (C) 2018-'25  Frank Sachsenheim
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""These are the specific richtext exceptions."""

from __future__ import annotations


class RichTextBaseException(Exception):
    pass


class InvalidCodePath(RichTextBaseException, RuntimeError):
    """Raised when a code path that is not expected to be executed is reached."""

    def __init__(self):  # pragma: no cover
        super().__init__(
            "An unintended path was taken through the code. Please report this bug."
        )


class InvalidOperation(RichTextBaseException):
    """Raised when an invalid operation is attempted by the client code."""

    pass


class ParsingError(RichTextBaseException):
    """Raised when a format can't make sense of the data it shall parse."""

    def __init__(self, format_name: str, message: str):
        self.format_name = format_name
        self.message = message
        super().__init__(f"The {format_name} format failed to parse: {message}")


class PreconditionViolation(RichTextBaseException, ValueError):
    """
    Raised when an operation requires a tree structure that the addressed node doesn't
    have, e.g. when *the* only child of a node with several children is requested.
    """

    pass


class TypeMismatch(RichTextBaseException, TypeError):
    """
    Raised when an object of an unsupported type is passed where the operation can't
    make use of it.
    """

    pass


__all__ = (
    InvalidCodePath.__name__,
    InvalidOperation.__name__,
    ParsingError.__name__,
    PreconditionViolation.__name__,
    RichTextBaseException.__name__,
    TypeMismatch.__name__,
)
