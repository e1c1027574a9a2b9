# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Exception hierarchy for flyspec.

All library exceptions inherit from FlySpecException, which carries an
optional error code and a context dict for structured error data.

Errors raised by SQLAlchemy itself (connection failures, integrity errors)
are not wrapped and propagate unchanged.
"""

from __future__ import annotations


class FlySpecException(Exception):
    """Base exception for all flyspec errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "NO_RESULT").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


class InvalidArgumentException(FlySpecException, TypeError):
    """A specification node or modifier was given an unusable argument."""

    default_code = "INVALID_ARGUMENT"


class NoResultException(FlySpecException):
    """A single result was expected but the query returned nothing."""

    default_code = "NO_RESULT"


class NonUniqueResultException(FlySpecException):
    """A single result was expected but the query returned several."""

    default_code = "NON_UNIQUE_RESULT"


def type_name(value: object) -> str:
    """Qualified class name of *value* for error messages (``builtins`` elided)."""
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"
