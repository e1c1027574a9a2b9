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
"""flyspec — composable Specification objects for SQLAlchemy queries.

Build reusable filters and query modifiers, combine them with ``&``, ``|``
and ``~`` (or :class:`Spec.and_x` / :class:`Spec.or_x`), and run them through
an :class:`EntitySpecificationRepository`. Result modifiers such as
:class:`AsArray` adjust the query after it is built and before it runs.
"""

from flyspec.core import Config, SpecificationProperties, config_properties
from flyspec.filter import FilterUtils
from flyspec.kernel import (
    FlySpecException,
    InvalidArgumentException,
    NonUniqueResultException,
    NoResultException,
)
from flyspec.query import HydrationMode, Query, QueryBuilder
from flyspec.repository import EntitySpecificationRepository
from flyspec.result import (
    AsArray,
    AsScalar,
    AsSingleScalar,
    ExecutionOption,
    ResultModifier,
    ResultModifierCollection,
    RoundDateTime,
)
from flyspec.spec import Spec
from flyspec.specification import (
    BaseSpecification,
    Filter,
    QueryModifier,
    Specification,
)

__version__ = "0.1.0"

__all__ = [
    "AsArray",
    "AsScalar",
    "AsSingleScalar",
    "BaseSpecification",
    "Config",
    "EntitySpecificationRepository",
    "ExecutionOption",
    "Filter",
    "FilterUtils",
    "FlySpecException",
    "HydrationMode",
    "InvalidArgumentException",
    "NoResultException",
    "NonUniqueResultException",
    "Query",
    "QueryBuilder",
    "QueryModifier",
    "ResultModifier",
    "ResultModifierCollection",
    "RoundDateTime",
    "Spec",
    "Specification",
    "SpecificationProperties",
    "config_properties",
]
