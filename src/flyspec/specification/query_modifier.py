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
"""Query modifiers: joins, ordering, grouping, paging and projection."""

from __future__ import annotations

from sqlalchemy import ColumnElement, func

from flyspec.kernel.exceptions import InvalidArgumentException, type_name
from flyspec.query.builder import QueryBuilder
from flyspec.specification.base import Filter, QueryModifier, Specification


class Join(QueryModifier):
    """Inner join of relationship ``alias.field``, registered as *new_alias*.

    Later nodes reach the joined entity by passing ``alias=new_alias``::

        Spec.and_x(Spec.join("posts", "p"), Spec.like("title", "SQL", alias="p"))
    """

    outer = False

    def __init__(self, field: str, new_alias: str, alias: str | None = None) -> None:
        self.field = field
        self.new_alias = new_alias
        self.alias = alias

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        qb.join(self.field, self.new_alias, self.alias or alias, outer=self.outer)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field!r} AS {self.new_alias!r})"


class InnerJoin(Join):
    pass


class LeftJoin(Join):
    outer = True


class Limit(QueryModifier):
    def __init__(self, count: int) -> None:
        if count < 0:
            raise InvalidArgumentException(f"Limit must not be negative, got {count}")
        self.count = count

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        qb.limit(self.count)


class Offset(QueryModifier):
    def __init__(self, count: int) -> None:
        if count < 0:
            raise InvalidArgumentException(f"Offset must not be negative, got {count}")
        self.count = count

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        qb.offset(self.count)


class OrderBy(QueryModifier):
    """Append ``alias.field ASC|DESC`` to the ORDER BY clause."""

    ASC = "ASC"
    DESC = "DESC"

    def __init__(self, field: str, order: str = ASC, alias: str | None = None) -> None:
        normalized = order.upper()
        if normalized not in (self.ASC, self.DESC):
            raise InvalidArgumentException(
                f'"{order}" is not a valid sort order; use "ASC" or "DESC"', context={"order": order}
            )
        self.field = field
        self.order = normalized
        self.alias = alias

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        column = qb.column(self.field, self.alias or alias)
        qb.order_by(column.asc() if self.order == self.ASC else column.desc())


class GroupBy(QueryModifier):
    def __init__(self, field: str, alias: str | None = None) -> None:
        self.field = field
        self.alias = alias

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        qb.group_by(qb.column(self.field, self.alias or alias))


class Distinct(QueryModifier):
    def modify(self, qb: QueryBuilder, alias: str) -> None:
        qb.distinct()


class Having(QueryModifier):
    """Move a filter into the HAVING clause instead of WHERE."""

    def __init__(self, child: Filter) -> None:
        if not isinstance(child, Filter):
            raise InvalidArgumentException(
                f"Child passed to Having must be a Filter, but instance of {type_name(child)} found",
                context={"child_type": type_name(child)},
            )
        self.child = child

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        if isinstance(self.child, QueryModifier):
            self.child.modify(qb, alias)
        clause = self.child.get_filter(qb, alias)
        if clause is not None:
            qb.having(clause)


class CountOf(Specification):
    """Select ``count(*)`` over the rows matched by *child*.

    Pair with :class:`~flyspec.result.AsSingleScalar` to get an ``int``
    back from ``match``.
    """

    def __init__(self, child: Filter | QueryModifier | None = None) -> None:
        if child is not None and not isinstance(child, (Filter, QueryModifier)):
            raise InvalidArgumentException(
                f"Child passed to CountOf must be a Filter or QueryModifier, but instance of {type_name(child)} found",
                context={"child_type": type_name(child)},
            )
        self.child = child

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        qb.set_statement(qb.statement.with_only_columns(func.count(), maintain_column_froms=True))
        if isinstance(self.child, QueryModifier):
            self.child.modify(qb, alias)

    def get_filter(self, qb: QueryBuilder, alias: str) -> ColumnElement[bool] | None:
        if isinstance(self.child, Filter):
            return self.child.get_filter(qb, alias)
        return None
