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
"""Ordered group of result modifiers applied as one."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import structlog

from flyspec.kernel.exceptions import InvalidArgumentException, type_name
from flyspec.query.query import Query
from flyspec.result.base import ResultModifier

logger = structlog.get_logger("flyspec.result")


class ResultModifierCollection(ResultModifier):
    """Apply several result modifiers to a query, in the order given.

    Children are checked as they are reached: a child that is not a
    :class:`ResultModifier` aborts :meth:`modify` with
    :class:`InvalidArgumentException`. Modifiers already applied to the
    query before the failure are not undone.

    Usage::

        modifiers = ResultModifierCollection(AsArray(), RoundDateTime(3600))
        rows = await repo.match(spec, modifiers)
    """

    def __init__(self, *modifiers: Any) -> None:
        self._modifiers: list[Any] = list(modifiers)

    def modify(self, query: Query) -> None:
        for child in self._modifiers:
            if not isinstance(child, ResultModifier):
                raise InvalidArgumentException(
                    "Child passed to ResultModifierCollection must be an instance of "
                    f"flyspec.result.ResultModifier, but instance of {type_name(child)} found",
                    context={"child_type": type_name(child)},
                )
            logger.debug("applying result modifier", modifier=type_name(child))
            child.modify(query)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._modifiers)

    def __len__(self) -> int:
        return len(self._modifiers)

    def __repr__(self) -> str:
        return f"ResultModifierCollection({', '.join(repr(m) for m in self._modifiers)})"
