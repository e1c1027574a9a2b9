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
"""Executable query object handed to result modifiers.

A :class:`Query` pairs a finished ``Select`` with the settings that decide
how it runs and how rows come back: a :class:`HydrationMode` and extra
SQLAlchemy execution options. Result modifiers adjust those settings in
place; execution goes through the ``AsyncSession`` the query was created
with.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Any

import structlog
from sqlalchemy import Select, inspect
from sqlalchemy.engine import Result, Row
from sqlalchemy.exc import MultipleResultsFound, NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from flyspec.kernel.exceptions import NonUniqueResultException, NoResultException

logger = structlog.get_logger("flyspec.query")

_NO_RESULT_MESSAGE = "No result was found for query although at least one row was expected."


class HydrationMode(enum.Enum):
    """How result rows are turned into Python values."""

    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"
    SINGLE_SCALAR = "single_scalar"


class Query:
    """A ``Select`` ready to run, plus its hydration mode and execution options."""

    def __init__(self, statement: Select[Any], session: AsyncSession | None = None) -> None:
        self.statement = statement
        self.session = session
        self.hydration_mode = HydrationMode.OBJECT
        self.execution_options: dict[str, Any] = {}
        self.log_sql = False

    def set_statement(self, statement: Select[Any]) -> Query:
        self.statement = statement
        return self

    def set_hydration_mode(self, mode: HydrationMode) -> Query:
        self.hydration_mode = mode
        return self

    def set_execution_option(self, key: str, value: Any) -> Query:
        self.execution_options[key] = value
        return self

    def get_sql(self) -> str:
        """Compiled SQL for the statement, using the session's dialect when bound."""
        if self.session is not None:
            return str(self.statement.compile(bind=self.session.get_bind()))
        return str(self.statement)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def _execute(self) -> Result[Any]:
        if self.session is None:
            raise RuntimeError("No AsyncSession configured for this query")
        statement = self.statement
        if self.execution_options:
            statement = statement.execution_options(**self.execution_options)
        if self.log_sql:
            logger.debug("executing query", sql=self.get_sql(), hydration=self.hydration_mode.value)
        return await self.session.execute(statement)

    async def get_result(self) -> Any:
        """Execute and hydrate according to :attr:`hydration_mode`.

        ``SINGLE_SCALAR`` returns one value; every other mode returns a list.
        In ``OBJECT`` mode each entity appears once even when a join repeats it.
        """
        result = await self._execute()

        if self.hydration_mode is HydrationMode.SINGLE_SCALAR:
            try:
                return result.scalar_one()
            except NoResultFound as exc:
                raise NoResultException(_NO_RESULT_MESSAGE) from exc
            except MultipleResultsFound as exc:
                raise NonUniqueResultException("The query returned more than one row.") from exc

        if self.hydration_mode is HydrationMode.SCALAR:
            return list(result.scalars().all())

        single_column = len(result.keys()) == 1
        rows = result.all()
        if self.hydration_mode is HydrationMode.ARRAY:
            return [_row_to_dict(row) for row in rows]
        if single_column:
            return _unique_entities(row[0] for row in rows)
        return [tuple(row) for row in rows]

    async def get_single_result(self) -> Any:
        """Return exactly one hydrated result."""
        result = await self.get_result()
        if self.hydration_mode is HydrationMode.SINGLE_SCALAR:
            return result
        if not result:
            raise NoResultException(_NO_RESULT_MESSAGE)
        if len(result) > 1:
            raise NonUniqueResultException(
                "The query returned more than one result.", context={"count": len(result)}
            )
        return result[0]

    async def get_one_or_null_result(self) -> Any:
        """Return one hydrated result, or ``None`` when there is none."""
        try:
            return await self.get_single_result()
        except NoResultException:
            return None


def _entity_to_dict(obj: Any) -> dict[str, Any]:
    mapper = inspect(obj).mapper
    return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}


def _row_to_dict(row: Row[Any]) -> dict[str, Any]:
    """Flatten a row into a dict of column values.

    A row holding a single mapped entity becomes that entity's column
    attributes. Otherwise each labelled element becomes one key, with
    entities nested as dicts.
    """
    mapping = row._mapping
    if len(mapping) == 1:
        value = next(iter(mapping.values()))
        if _is_mapped(value):
            return _entity_to_dict(value)
    return {
        str(key): _entity_to_dict(value) if _is_mapped(value) else value
        for key, value in mapping.items()
    }


def _is_mapped(value: Any) -> bool:
    return hasattr(type(value), "__mapper__")


def _unique_entities(values: Iterable[Any]) -> list[Any]:
    """Drop repeated entity instances, keeping first-seen order.

    A join to a collection yields the root entity once per joined row; the
    session's identity map hands back the same instance each time. Plain
    column values are kept as they are.
    """
    seen: set[int] = set()
    unique: list[Any] = []
    for value in values:
        if _is_mapped(value):
            if id(value) in seen:
                continue
            seen.add(id(value))
        unique.append(value)
    return unique
