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
"""Tests for AndX, OrX and Not — composition of specification nodes."""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import User
from flyspec.kernel.exceptions import InvalidArgumentException
from flyspec.query.builder import QueryBuilder
from flyspec.specification import AndX, Eq, Filter, IsNull, Join, Limit, Not, OrderBy, OrX, QueryModifier

# ---------------------------------------------------------------------------
# Helper: execute a spec and return matching user names
# ---------------------------------------------------------------------------


async def _names(session: AsyncSession, spec: Filter | QueryModifier, ordered: bool = False) -> list[str]:
    stmt = spec.to_predicate(User, select(User))
    result = await session.execute(stmt)
    names = [u.name for u in result.scalars().all()]
    return names if ordered else sorted(names)


ADMIN = Eq("role", "admin")
ACTIVE = Eq("active", True)


class TestAndX:
    async def test_all_children_must_match(self, seeded_session: AsyncSession):
        assert await _names(seeded_session, AndX(ADMIN, ACTIVE)) == ["Alice"]

    async def test_operator(self, seeded_session: AsyncSession):
        spec = ADMIN & ACTIVE & Eq("name", "Alice")
        assert isinstance(spec, AndX)
        assert await _names(seeded_session, spec) == ["Alice"]

    def test_empty_has_no_filter(self):
        stmt = AndX().to_predicate(User, select(User))
        assert stmt.whereclause is None

    def test_single_filter_is_unwrapped(self):
        qb = QueryBuilder(User, "e")
        assert str(AndX(ADMIN).get_filter(qb, "e")) == str(ADMIN.get_filter(qb, "e"))

    async def test_modifiers_applied_in_order(self, seeded_session: AsyncSession):
        spec = AndX(OrderBy("age", "DESC"), OrderBy("name"), Limit(2))
        assert await _names(seeded_session, spec, ordered=True) == ["Charlie", "Diana"]

    def test_rejects_foreign_child(self):
        with pytest.raises(InvalidArgumentException, match="must be a Filter or QueryModifier, but instance of str found"):
            AndX(ADMIN, "role = 'admin'")  # type: ignore[arg-type]


class TestOrX:
    async def test_either_child_may_match(self, seeded_session: AsyncSession):
        assert await _names(seeded_session, OrX(ADMIN, ACTIVE)) == ["Alice", "Bob", "Charlie"]

    async def test_operator(self, seeded_session: AsyncSession):
        spec = ADMIN | Eq("name", "Diana")
        assert isinstance(spec, OrX)
        assert await _names(seeded_session, spec) == ["Alice", "Charlie", "Diana"]

    async def test_children_without_filter_are_skipped(self, seeded_session: AsyncSession):
        assert await _names(seeded_session, OrX(AndX(), ADMIN)) == ["Alice", "Charlie"]

    async def test_query_modifier_child(self, seeded_session: AsyncSession):
        spec = OrX(Join("posts", "p"), Eq("title", "Cooking at home", alias="p"), Eq("published", False, alias="p"))
        assert await _names(seeded_session, spec) == ["Alice", "Bob"]


class TestNot:
    async def test_negates(self, seeded_session: AsyncSession):
        assert await _names(seeded_session, Not(ADMIN)) == ["Bob", "Diana"]

    async def test_operator(self, seeded_session: AsyncSession):
        spec = ~ACTIVE
        assert isinstance(spec, Not)
        assert await _names(seeded_session, spec) == ["Charlie", "Diana"]

    async def test_negated_null_check(self, seeded_session: AsyncSession):
        assert await _names(seeded_session, ~IsNull("email")) == ["Alice", "Charlie"]

    async def test_not_of_empty_matches_all(self, seeded_session: AsyncSession):
        assert await _names(seeded_session, Not(AndX())) == ["Alice", "Bob", "Charlie", "Diana"]

    def test_rejects_non_filter(self):
        with pytest.raises(InvalidArgumentException, match="Child passed to Not must be a Filter"):
            Not(Join("posts", "p"))  # type: ignore[arg-type]

    async def test_forwards_modify_of_specification_child(self, seeded_session: AsyncSession):
        spec = Not(AndX(Join("posts", "p"), Eq("published", True, alias="p")))
        assert await _names(seeded_session, spec) == ["Alice"]


class TestComplexComposition:
    async def test_and_or_nesting(self, seeded_session: AsyncSession):
        # (admin AND active) OR Diana -> Alice, Diana
        spec = (ADMIN & ACTIVE) | Eq("name", "Diana")
        assert await _names(seeded_session, spec) == ["Alice", "Diana"]

    async def test_not_combined_with_and(self, seeded_session: AsyncSession):
        assert await _names(seeded_session, ~ADMIN & ACTIVE) == ["Bob"]

    def test_nodes_are_reusable(self):
        first = ADMIN.to_predicate(User, select(User))
        second = ADMIN.to_predicate(User, select(User))
        assert str(first) == str(second)
