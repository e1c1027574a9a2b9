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
"""``Spec`` — factory shortcuts for every specification node and result modifier.

Example::

    from flyspec import Spec

    spec = Spec.and_x(
        Spec.join("posts", "p"),
        Spec.or_x(Spec.eq("role", "admin"), Spec.gte("age", 18)),
        Spec.like("title", "sql", alias="p"),
        Spec.order_by("name"),
        Spec.limit(10),
    )
    users = await repo.match(spec)
    total = await repo.match(Spec.count_of(Spec.eq("active", True)), Spec.as_single_scalar())
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from flyspec.result.collection import ResultModifierCollection
from flyspec.result.modifiers import AsArray, AsScalar, AsSingleScalar, ExecutionOption, RoundDateTime
from flyspec.specification.base import Filter, QueryModifier
from flyspec.specification.filter import (
    Between,
    Eq,
    Gt,
    Gte,
    In,
    IsNotNull,
    IsNull,
    Like,
    Lt,
    Lte,
    Neq,
    NotIn,
)
from flyspec.specification.logic import AndX, Not, OrX
from flyspec.specification.query_modifier import (
    CountOf,
    Distinct,
    GroupBy,
    Having,
    InnerJoin,
    Join,
    LeftJoin,
    Limit,
    Offset,
    OrderBy,
)


class Spec:
    """Static constructors; each returns a new node."""

    # Logic

    @staticmethod
    def and_x(*children: Filter | QueryModifier) -> AndX:
        return AndX(*children)

    @staticmethod
    def or_x(*children: Filter | QueryModifier) -> OrX:
        return OrX(*children)

    @staticmethod
    def not_(child: Filter) -> Not:
        return Not(child)

    # Filters

    @staticmethod
    def eq(field: str, value: Any, alias: str | None = None) -> Eq:
        return Eq(field, value, alias)

    @staticmethod
    def neq(field: str, value: Any, alias: str | None = None) -> Neq:
        return Neq(field, value, alias)

    @staticmethod
    def lt(field: str, value: Any, alias: str | None = None) -> Lt:
        return Lt(field, value, alias)

    @staticmethod
    def lte(field: str, value: Any, alias: str | None = None) -> Lte:
        return Lte(field, value, alias)

    @staticmethod
    def gt(field: str, value: Any, alias: str | None = None) -> Gt:
        return Gt(field, value, alias)

    @staticmethod
    def gte(field: str, value: Any, alias: str | None = None) -> Gte:
        return Gte(field, value, alias)

    @staticmethod
    def in_(field: str, values: Iterable[Any], alias: str | None = None) -> In:
        return In(field, values, alias)

    @staticmethod
    def not_in(field: str, values: Iterable[Any], alias: str | None = None) -> NotIn:
        return NotIn(field, values, alias)

    @staticmethod
    def is_null(field: str, alias: str | None = None) -> IsNull:
        return IsNull(field, alias)

    @staticmethod
    def is_not_null(field: str, alias: str | None = None) -> IsNotNull:
        return IsNotNull(field, alias)

    @staticmethod
    def like(field: str, value: str, format: str = Like.CONTAINS, alias: str | None = None) -> Like:
        return Like(field, value, format, alias)

    @staticmethod
    def between(field: str, low: Any, high: Any, alias: str | None = None) -> Between:
        return Between(field, low, high, alias)

    # Query modifiers

    @staticmethod
    def join(field: str, new_alias: str, alias: str | None = None) -> Join:
        return Join(field, new_alias, alias)

    @staticmethod
    def inner_join(field: str, new_alias: str, alias: str | None = None) -> InnerJoin:
        return InnerJoin(field, new_alias, alias)

    @staticmethod
    def left_join(field: str, new_alias: str, alias: str | None = None) -> LeftJoin:
        return LeftJoin(field, new_alias, alias)

    @staticmethod
    def limit(count: int) -> Limit:
        return Limit(count)

    @staticmethod
    def offset(count: int) -> Offset:
        return Offset(count)

    @staticmethod
    def order_by(field: str, order: str = OrderBy.ASC, alias: str | None = None) -> OrderBy:
        return OrderBy(field, order, alias)

    @staticmethod
    def group_by(field: str, alias: str | None = None) -> GroupBy:
        return GroupBy(field, alias)

    @staticmethod
    def distinct() -> Distinct:
        return Distinct()

    @staticmethod
    def having(child: Filter) -> Having:
        return Having(child)

    @staticmethod
    def count_of(child: Filter | QueryModifier | None = None) -> CountOf:
        return CountOf(child)

    # Result modifiers

    @staticmethod
    def as_array() -> AsArray:
        return AsArray()

    @staticmethod
    def as_scalar() -> AsScalar:
        return AsScalar()

    @staticmethod
    def as_single_scalar() -> AsSingleScalar:
        return AsSingleScalar()

    @staticmethod
    def round_datetime(round_seconds: int) -> RoundDateTime:
        return RoundDateTime(round_seconds)

    @staticmethod
    def execution_option(**options: Any) -> ExecutionOption:
        return ExecutionOption(**options)

    @staticmethod
    def result_modifiers(*modifiers: Any) -> ResultModifierCollection:
        return ResultModifierCollection(*modifiers)
