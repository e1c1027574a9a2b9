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
"""Logical composition: AND, OR and NOT over specification nodes."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import ColumnElement, and_, not_, or_

from flyspec.kernel.exceptions import InvalidArgumentException, type_name
from flyspec.query.builder import QueryBuilder
from flyspec.specification.base import Filter, QueryModifier, Specification


class LogicX(Specification):
    """Apply every child in order and join their filters with one SQL conjunction.

    Children may be filters, query modifiers or both. Children that yield no
    filter are left out of the conjunction; a single remaining filter is
    returned as is.
    """

    _combine: Callable[..., ColumnElement[bool]]

    def __init__(self, *children: Filter | QueryModifier) -> None:
        for child in children:
            if not isinstance(child, (Filter, QueryModifier)):
                raise InvalidArgumentException(
                    f"Child passed to {type(self).__name__} must be a Filter or QueryModifier, "
                    f"but instance of {type_name(child)} found",
                    context={"child_type": type_name(child)},
                )
        self.children: tuple[Filter | QueryModifier, ...] = children

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        for child in self.children:
            if isinstance(child, QueryModifier):
                child.modify(qb, alias)

    def get_filter(self, qb: QueryBuilder, alias: str) -> ColumnElement[bool] | None:
        clauses: list[ColumnElement[bool]] = []
        for child in self.children:
            if not isinstance(child, Filter):
                continue
            clause = child.get_filter(qb, alias)
            if clause is not None:
                clauses.append(clause)
        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return type(self)._combine(*clauses)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(c) for c in self.children)})"


class AndX(LogicX):
    """All children must match."""

    _combine = staticmethod(and_)


class OrX(LogicX):
    """At least one child must match."""

    _combine = staticmethod(or_)


class Not(Specification):
    """Negates the filter of its child."""

    def __init__(self, child: Filter) -> None:
        if not isinstance(child, Filter):
            raise InvalidArgumentException(
                f"Child passed to Not must be a Filter, but instance of {type_name(child)} found",
                context={"child_type": type_name(child)},
            )
        self.child = child

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        if isinstance(self.child, QueryModifier):
            self.child.modify(qb, alias)

    def get_filter(self, qb: QueryBuilder, alias: str) -> ColumnElement[bool] | None:
        clause = self.child.get_filter(qb, alias)
        if clause is None:
            return None
        return not_(clause)

    def __repr__(self) -> str:
        return f"Not({self.child!r})"
