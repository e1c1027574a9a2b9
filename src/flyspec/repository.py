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
"""Async repository that runs specifications against one entity type."""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast, get_args, get_origin

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from flyspec.core.properties import SpecificationProperties
from flyspec.kernel.exceptions import InvalidArgumentException, type_name
from flyspec.query.builder import QueryBuilder
from flyspec.query.query import Query
from flyspec.result.base import ResultModifier
from flyspec.specification.base import Filter, QueryModifier, apply_specification

T = TypeVar("T")

logger = structlog.get_logger("flyspec.repository")


class EntitySpecificationRepository(Generic[T]):
    """Match specifications against entity ``T``.

    Usage::

        class UserRepository(EntitySpecificationRepository[User]):
            pass

        repo = UserRepository(session=session)
        admins = await repo.match(Spec.eq("role", "admin"))
        names = await repo.match(Spec.order_by("name"), Spec.as_array())
    """

    _entity_type: type | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in getattr(cls, "__orig_bases__", []):
            if get_origin(base) is EntitySpecificationRepository:
                args = get_args(base)
                if args and not isinstance(args[0], TypeVar):
                    cls._entity_type = args[0]
                break

    def __init__(
        self,
        model: type[T] | None = None,
        session: AsyncSession | None = None,
        properties: SpecificationProperties | None = None,
    ) -> None:
        resolved = model or getattr(type(self), "_entity_type", None)
        if resolved is None:
            raise TypeError(
                f"{type(self).__name__} requires either EntitySpecificationRepository[Entity] "
                "declaration or explicit model argument"
            )
        self._model: type[T] = cast(type[T], resolved)
        self._session = session
        self._properties = properties or SpecificationProperties()

    @property
    def alias(self) -> str:
        """Alias the root entity is registered under."""
        return self._properties.default_alias

    def get_query_builder(
        self, spec: Filter | QueryModifier | None = None, alias: str | None = None
    ) -> QueryBuilder:
        """Return a builder for ``select(T)`` with *spec* applied."""
        alias = alias or self.alias
        qb = QueryBuilder(self._model, alias)
        return apply_specification(qb, spec, alias)

    def get_query(
        self,
        spec: Filter | QueryModifier | None = None,
        result_modifier: ResultModifier | None = None,
    ) -> Query:
        """Build the executable query for *spec* and apply *result_modifier* to it."""
        query = self.get_query_builder(spec).get_query(self._session)
        query.log_sql = self._properties.log_queries
        if result_modifier is not None:
            if not isinstance(result_modifier, ResultModifier):
                raise InvalidArgumentException(
                    f"Result modifier must be an instance of flyspec.result.ResultModifier, "
                    f"but instance of {type_name(result_modifier)} found",
                    context={"modifier_type": type_name(result_modifier)},
                )
            result_modifier.modify(query)
        return query

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("No AsyncSession configured; pass session= to the repository")
        return self._session

    async def match(
        self,
        spec: Filter | QueryModifier | None = None,
        result_modifier: ResultModifier | None = None,
    ) -> Any:
        """All results for *spec*, hydrated per the query's hydration mode."""
        self._require_session()
        query = self.get_query(spec, result_modifier)
        logger.debug("matching specification", entity=self._model.__name__, spec=repr(spec))
        return await query.get_result()

    async def match_single_result(
        self,
        spec: Filter | QueryModifier | None = None,
        result_modifier: ResultModifier | None = None,
    ) -> Any:
        """Exactly one result; raises NoResultException or NonUniqueResultException otherwise."""
        self._require_session()
        return await self.get_query(spec, result_modifier).get_single_result()

    async def match_one_or_null_result(
        self,
        spec: Filter | QueryModifier | None = None,
        result_modifier: ResultModifier | None = None,
    ) -> Any:
        """One result or ``None``; raises NonUniqueResultException on several."""
        self._require_session()
        return await self.get_query(spec, result_modifier).get_one_or_null_result()
