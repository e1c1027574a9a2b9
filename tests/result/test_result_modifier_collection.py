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
"""Tests for ResultModifierCollection — ordered, type-checked application."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from conftest import User
from flyspec.kernel.exceptions import InvalidArgumentException
from flyspec.query.query import HydrationMode, Query
from flyspec.result import AsArray, AsSingleScalar, ResultModifier, ResultModifierCollection


class Recorder(ResultModifier):
    def __init__(self, name: str, log: list[str]) -> None:
        self.name = name
        self.log = log

    def modify(self, query: Query) -> None:
        self.log.append(self.name)


class Exploding(ResultModifier):
    def modify(self, query: Query) -> None:
        raise RuntimeError("boom")


class DuckTyped:
    """Has a modify method but does not subclass ResultModifier."""

    def modify(self, query: Query) -> None:
        query.set_hydration_mode(HydrationMode.SCALAR)


@pytest.fixture
def query() -> Query:
    return Query(select(User))


class TestResultModifierCollectionOrdering:
    def test_applies_in_insertion_order(self, query: Query):
        log: list[str] = []
        collection = ResultModifierCollection(Recorder("a", log), Recorder("b", log), Recorder("c", log))
        collection.modify(query)
        assert log == ["a", "b", "c"]

    def test_later_modifier_wins(self, query: Query):
        ResultModifierCollection(AsArray(), AsSingleScalar()).modify(query)
        assert query.hydration_mode is HydrationMode.SINGLE_SCALAR

    def test_empty_collection_is_noop(self, query: Query):
        ResultModifierCollection().modify(query)
        assert query.hydration_mode is HydrationMode.OBJECT
        assert query.execution_options == {}

    def test_nested_collection(self, query: Query):
        log: list[str] = []
        inner = ResultModifierCollection(Recorder("inner-1", log), Recorder("inner-2", log))
        ResultModifierCollection(Recorder("outer", log), inner).modify(query)
        assert log == ["outer", "inner-1", "inner-2"]

    def test_is_iterable_and_sized(self):
        first, second = AsArray(), AsSingleScalar()
        collection = ResultModifierCollection(first, second)
        assert len(collection) == 2
        assert list(collection) == [first, second]


class TestResultModifierCollectionValidation:
    def test_rejects_non_modifier(self, query: Query):
        with pytest.raises(InvalidArgumentException, match="instance of object found"):
            ResultModifierCollection(object()).modify(query)

    def test_message_names_qualified_type(self, query: Query):
        with pytest.raises(InvalidArgumentException) as exc_info:
            ResultModifierCollection(DuckTyped()).modify(query)
        assert "DuckTyped" in str(exc_info.value)
        assert exc_info.value.context["child_type"].endswith("DuckTyped")
        assert exc_info.value.code == "INVALID_ARGUMENT"

    def test_error_is_a_type_error(self, query: Query):
        with pytest.raises(TypeError):
            ResultModifierCollection("as_array").modify(query)

    def test_construction_does_not_validate(self):
        collection = ResultModifierCollection(42)
        assert len(collection) == 1

    def test_earlier_modifiers_stay_applied(self, query: Query):
        with pytest.raises(InvalidArgumentException):
            ResultModifierCollection(AsArray(), 42, AsSingleScalar()).modify(query)
        assert query.hydration_mode is HydrationMode.ARRAY

    def test_stops_at_offending_child(self, query: Query):
        log: list[str] = []
        with pytest.raises(InvalidArgumentException):
            ResultModifierCollection(Recorder("first", log), None, Recorder("never", log)).modify(query)
        assert log == ["first"]

    def test_child_failure_propagates(self, query: Query):
        log: list[str] = []
        with pytest.raises(RuntimeError, match="boom"):
            ResultModifierCollection(Recorder("first", log), Exploding(), Recorder("never", log)).modify(query)
        assert log == ["first"]
