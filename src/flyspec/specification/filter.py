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
"""Leaf filters: one column-level predicate each.

Each filter resolves ``alias.field`` through the :class:`QueryBuilder` at
the time it is applied and hands the comparison to SQLAlchemy's column
operators, so values are always sent as bound parameters.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable
from typing import Any, ClassVar

from sqlalchemy import ColumnElement

from flyspec.kernel.exceptions import InvalidArgumentException
from flyspec.query.builder import QueryBuilder
from flyspec.specification.base import Filter


class FieldFilter(Filter):
    """A filter on a single field of an aliased entity."""

    def __init__(self, field: str, alias: str | None = None) -> None:
        self.field = field
        self.alias = alias

    def get_filter(self, qb: QueryBuilder, alias: str) -> ColumnElement[bool]:
        return self.build(qb.column(self.field, self.alias or alias))

    def build(self, column: Any) -> ColumnElement[bool]:
        raise NotImplementedError

    def __repr__(self) -> str:
        target = f"{self.alias}.{self.field}" if self.alias else self.field
        return f"{type(self).__name__}({target!r})"


class Comparison(FieldFilter):
    """Binary comparison between a field and a value."""

    EQ = "="
    NEQ = "<>"
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="

    OPERATORS: ClassVar[dict[str, Callable[[Any, Any], Any]]] = {
        EQ: operator.eq,
        NEQ: operator.ne,
        LT: operator.lt,
        LTE: operator.le,
        GT: operator.gt,
        GTE: operator.ge,
    }

    def __init__(self, op: str, field: str, value: Any, alias: str | None = None) -> None:
        if op not in self.OPERATORS:
            raise InvalidArgumentException(
                f'"{op}" is not a valid comparison operator. Valid operators are: '
                f"{', '.join(self.OPERATORS)}",
                context={"operator": op},
            )
        super().__init__(field, alias)
        self.operator = op
        self.value = value

    def build(self, column: Any) -> ColumnElement[bool]:
        return self.OPERATORS[self.operator](column, self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field!r} {self.operator} {self.value!r})"


class Eq(Comparison):
    def __init__(self, field: str, value: Any, alias: str | None = None) -> None:
        super().__init__(Comparison.EQ, field, value, alias)


class Neq(Comparison):
    def __init__(self, field: str, value: Any, alias: str | None = None) -> None:
        super().__init__(Comparison.NEQ, field, value, alias)


class Lt(Comparison):
    def __init__(self, field: str, value: Any, alias: str | None = None) -> None:
        super().__init__(Comparison.LT, field, value, alias)


class Lte(Comparison):
    def __init__(self, field: str, value: Any, alias: str | None = None) -> None:
        super().__init__(Comparison.LTE, field, value, alias)


class Gt(Comparison):
    def __init__(self, field: str, value: Any, alias: str | None = None) -> None:
        super().__init__(Comparison.GT, field, value, alias)


class Gte(Comparison):
    def __init__(self, field: str, value: Any, alias: str | None = None) -> None:
        super().__init__(Comparison.GTE, field, value, alias)


class In(FieldFilter):
    """Field value is one of *values*."""

    def __init__(self, field: str, values: Iterable[Any], alias: str | None = None) -> None:
        super().__init__(field, alias)
        self.values = list(values)

    def build(self, column: Any) -> ColumnElement[bool]:
        return column.in_(self.values)


class NotIn(In):
    """Field value is none of *values*."""

    def build(self, column: Any) -> ColumnElement[bool]:
        return column.not_in(self.values)


class IsNull(FieldFilter):
    def build(self, column: Any) -> ColumnElement[bool]:
        return column.is_(None)


class IsNotNull(FieldFilter):
    def build(self, column: Any) -> ColumnElement[bool]:
        return column.is_not(None)


class Like(FieldFilter):
    """SQL ``LIKE`` against *value* placed according to *format*."""

    CONTAINS = "%{}%"
    STARTS_WITH = "{}%"
    ENDS_WITH = "%{}"

    FORMATS: ClassVar[tuple[str, ...]] = (CONTAINS, STARTS_WITH, ENDS_WITH)

    def __init__(self, field: str, value: str, format: str = CONTAINS, alias: str | None = None) -> None:
        if format not in self.FORMATS:
            raise InvalidArgumentException(
                f'"{format}" is not a valid LIKE format; use Like.CONTAINS, Like.STARTS_WITH or Like.ENDS_WITH',
                context={"format": format},
            )
        super().__init__(field, alias)
        self.value = value
        self.format = format

    @property
    def pattern(self) -> str:
        return self.format.format(self.value)

    def build(self, column: Any) -> ColumnElement[bool]:
        return column.like(self.pattern)


class Between(FieldFilter):
    """Field value lies between *low* and *high*, inclusive."""

    def __init__(self, field: str, low: Any, high: Any, alias: str | None = None) -> None:
        super().__init__(field, alias)
        self.low = low
        self.high = high

    def build(self, column: Any) -> ColumnElement[bool]:
        return column.between(self.low, self.high)
