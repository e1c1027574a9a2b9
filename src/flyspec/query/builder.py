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
"""Alias-aware wrapper around a SQLAlchemy ``Select``.

SQLAlchemy statements are immutable: every ``.where()`` or ``.join()``
returns a new ``Select``. Specifications, however, are applied one after
another against a shared target, so :class:`QueryBuilder` holds the
current statement and swaps it as nodes contribute to it. It also keeps
the alias registry that lets a node name the entity it filters on::

    qb = QueryBuilder(User, "u")
    qb.join("posts", "p", "u")
    qb.where(qb.column("title", "p") == "Hello")
    await session.execute(qb.statement)
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import structlog
from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import RelationshipProperty, aliased

from flyspec.kernel.exceptions import InvalidArgumentException
from flyspec.query.query import Query

logger = structlog.get_logger("flyspec.query")


class QueryBuilder:
    """Mutable holder for a ``Select`` and the entities reachable by alias."""

    def __init__(self, entity: type[Any], alias: str = "e", statement: Select[Any] | None = None) -> None:
        self._root_alias = alias
        self._root_entity = entity
        self._aliases: dict[str, Any] = {alias: entity}
        self._statement: Select[Any] = statement if statement is not None else select(entity)
        logger.debug("query builder created", entity=entity.__name__, alias=alias)

    @property
    def statement(self) -> Select[Any]:
        return self._statement

    def set_statement(self, statement: Select[Any]) -> QueryBuilder:
        self._statement = statement
        return self

    @property
    def root_alias(self) -> str:
        return self._root_alias

    @property
    def root_entity(self) -> type[Any]:
        return self._root_entity

    @property
    def aliases(self) -> Mapping[str, Any]:
        return MappingProxyType(self._aliases)

    # ------------------------------------------------------------------
    # Alias resolution
    # ------------------------------------------------------------------

    def entity(self, alias: str) -> Any:
        """Return the mapped class (or ``aliased()`` entity) registered as *alias*."""
        try:
            return self._aliases[alias]
        except KeyError:
            raise InvalidArgumentException(
                f"Unknown alias '{alias}'; known aliases: {', '.join(sorted(self._aliases))}",
                context={"alias": alias},
            ) from None

    def column(self, field: str, alias: str) -> Any:
        """Return the instrumented attribute ``alias.field``."""
        entity = self.entity(alias)
        try:
            return getattr(entity, field)
        except AttributeError:
            raise InvalidArgumentException(
                f"'{field}' is not an attribute of alias '{alias}'",
                context={"alias": alias, "field": field},
            ) from None

    # ------------------------------------------------------------------
    # Statement building
    # ------------------------------------------------------------------

    def where(self, clause: ColumnElement[bool]) -> QueryBuilder:
        self._statement = self._statement.where(clause)
        return self

    def having(self, clause: ColumnElement[bool]) -> QueryBuilder:
        self._statement = self._statement.having(clause)
        return self

    def order_by(self, *clauses: Any) -> QueryBuilder:
        self._statement = self._statement.order_by(*clauses)
        return self

    def group_by(self, *clauses: Any) -> QueryBuilder:
        self._statement = self._statement.group_by(*clauses)
        return self

    def limit(self, count: int) -> QueryBuilder:
        self._statement = self._statement.limit(count)
        return self

    def offset(self, count: int) -> QueryBuilder:
        self._statement = self._statement.offset(count)
        return self

    def distinct(self) -> QueryBuilder:
        self._statement = self._statement.distinct()
        return self

    def join(self, field: str, new_alias: str, alias: str, outer: bool = False) -> QueryBuilder:
        """Join relationship ``alias.field`` and register its target as *new_alias*."""
        if new_alias in self._aliases:
            raise InvalidArgumentException(
                f"Alias '{new_alias}' is already in use", context={"alias": new_alias}
            )
        relationship = self.column(field, alias)
        prop = getattr(relationship, "property", None)
        if not isinstance(prop, RelationshipProperty):
            raise InvalidArgumentException(
                f"'{alias}.{field}' is not a relationship and cannot be joined",
                context={"alias": alias, "field": field},
            )
        target = aliased(prop.mapper.class_, name=new_alias)
        self._statement = self._statement.join(relationship.of_type(target), isouter=outer)
        self._aliases[new_alias] = target
        logger.debug("joined relationship", path=f"{alias}.{field}", alias=new_alias, outer=outer)
        return self

    def get_query(self, session: AsyncSession | None = None) -> Query:
        return Query(self._statement, session)
