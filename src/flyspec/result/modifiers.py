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
"""Built-in result modifiers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.sql.elements import BindParameter
from sqlalchemy.sql.visitors import cloned_traverse

from flyspec.kernel.exceptions import InvalidArgumentException
from flyspec.query.query import HydrationMode, Query
from flyspec.result.base import ResultModifier

_EPOCH = datetime(1970, 1, 1)
_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=UTC)


class AsArray(ResultModifier):
    """Hydrate rows as dicts of column values instead of entities."""

    def modify(self, query: Query) -> None:
        query.set_hydration_mode(HydrationMode.ARRAY)


class AsScalar(ResultModifier):
    """Hydrate the first column of each row."""

    def modify(self, query: Query) -> None:
        query.set_hydration_mode(HydrationMode.SCALAR)


class AsSingleScalar(ResultModifier):
    """Hydrate exactly one value, e.g. the result of :class:`~flyspec.specification.CountOf`."""

    def modify(self, query: Query) -> None:
        query.set_hydration_mode(HydrationMode.SINGLE_SCALAR)


class ExecutionOption(ResultModifier):
    """Pass SQLAlchemy execution options (``populate_existing``, ``yield_per``...)."""

    def __init__(self, **options: Any) -> None:
        self.options = options

    def modify(self, query: Query) -> None:
        for key, value in self.options.items():
            query.set_execution_option(key, value)


class RoundDateTime(ResultModifier):
    """Round every ``datetime`` parameter down to a multiple of *round_seconds*.

    Queries built from "now" differ on every call; rounding makes repeated
    queries within the same window bind identical values. The statement
    is cloned, so the original ``Select`` keeps its exact values.
    """

    def __init__(self, round_seconds: int) -> None:
        if round_seconds <= 0:
            raise InvalidArgumentException(f"round_seconds must be positive, got {round_seconds}")
        self.round_seconds = round_seconds

    def round(self, value: datetime) -> datetime:
        epoch = _EPOCH if value.tzinfo is None else _EPOCH_UTC
        return value - (value - epoch) % timedelta(seconds=self.round_seconds)

    def modify(self, query: Query) -> None:
        def visit_bindparam(bind: BindParameter[Any]) -> None:
            if isinstance(bind.value, datetime):
                bind.value = self.round(bind.value)

        query.set_statement(cloned_traverse(query.statement, {}, {"bindparam": visit_bindparam}))
