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
"""Composable specification nodes.

Two capabilities make up a specification tree:

* :class:`Filter` contributes a boolean SQL expression through
  ``get_filter(qb, alias)``.
* :class:`QueryModifier` changes the statement itself through
  ``modify(qb, alias)``: joins, ordering, limits, selected columns.

:class:`Specification` has both. Any node composes with ``&`` (AND) and
``|`` (OR); filters also support ``~`` (NOT)::

    spec = Spec.eq("role", "admin") & ~Spec.is_null("email")
    stmt = spec.to_predicate(User, select(User))

``alias`` names the entity a node works on. A node built without one uses
the alias it is applied under, which at the top of a tree is the root
entity's alias.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from sqlalchemy import ColumnElement, Select

from flyspec.query.builder import QueryBuilder

if TYPE_CHECKING:
    from flyspec.specification.logic import AndX, Not, OrX

DEFAULT_ALIAS = "e"


class _Composable:
    """Operator overloads shared by every specification node."""

    def __and__(self, other: Filter | QueryModifier) -> AndX:
        from flyspec.specification.logic import AndX

        return AndX(self, other)  # type: ignore[arg-type]

    def __or__(self, other: Filter | QueryModifier) -> OrX:
        from flyspec.specification.logic import OrX

        return OrX(self, other)  # type: ignore[arg-type]

    def to_predicate(self, root: type[Any], query: Select[Any], alias: str = DEFAULT_ALIAS) -> Select[Any]:
        """Apply this node to *query*, whose root entity *root* is known as *alias*."""
        qb = QueryBuilder(root, alias, query)
        apply_specification(qb, self, alias)  # type: ignore[arg-type]
        return qb.statement


class Filter(_Composable, ABC):
    """A node that yields a WHERE expression."""

    @abstractmethod
    def get_filter(self, qb: QueryBuilder, alias: str) -> ColumnElement[bool] | None: ...

    def __invert__(self) -> Not:
        from flyspec.specification.logic import Not

        return Not(self)


class QueryModifier(_Composable, ABC):
    """A node that rewrites the statement held by a :class:`QueryBuilder`."""

    @abstractmethod
    def modify(self, qb: QueryBuilder, alias: str) -> None: ...


class Specification(Filter, QueryModifier):
    """A node that may both filter and modify. Both default to doing nothing."""

    def get_filter(self, qb: QueryBuilder, alias: str) -> ColumnElement[bool] | None:
        return None

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        return None


class BaseSpecification(Specification):
    """Base for reusable, named specifications.

    Subclasses override :meth:`get_spec` to return the tree they stand for::

        class ActiveAdmins(BaseSpecification):
            def get_spec(self):
                return Spec.and_x(Spec.eq("role", "admin"), Spec.eq("active", True))

        users = await repo.match(ActiveAdmins())

    An alias passed to the constructor overrides the one the node is
    applied under.
    """

    def __init__(self, alias: str | None = None) -> None:
        self.alias = alias

    def get_spec(self) -> Filter | QueryModifier | None:
        return None

    def get_filter(self, qb: QueryBuilder, alias: str) -> ColumnElement[bool] | None:
        spec = self.get_spec()
        if isinstance(spec, Filter):
            return spec.get_filter(qb, self.alias or alias)
        return None

    def modify(self, qb: QueryBuilder, alias: str) -> None:
        spec = self.get_spec()
        if isinstance(spec, QueryModifier):
            spec.modify(qb, self.alias or alias)


def apply_specification(qb: QueryBuilder, spec: Filter | QueryModifier | None, alias: str) -> QueryBuilder:
    """Run *spec* against *qb*: modifications first, then its filter as a WHERE clause."""
    if spec is None:
        return qb
    if isinstance(spec, QueryModifier):
        spec.modify(qb, alias)
    if isinstance(spec, Filter):
        clause = spec.get_filter(qb, alias)
        if clause is not None:
            qb.where(clause)
    return qb
