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
"""Specification nodes: filters, query modifiers and their logical composition."""

from flyspec.specification.base import (
    DEFAULT_ALIAS,
    BaseSpecification,
    Filter,
    QueryModifier,
    Specification,
    apply_specification,
)
from flyspec.specification.filter import (
    Between,
    Comparison,
    Eq,
    FieldFilter,
    Gt,
    Gte,
    In,
    IsNotNull,
    IsNull,
    Like,
    Lt,
    Lte,
    Neq,
    NotIn,
)
from flyspec.specification.logic import AndX, LogicX, Not, OrX
from flyspec.specification.query_modifier import (
    CountOf,
    Distinct,
    GroupBy,
    Having,
    InnerJoin,
    Join,
    LeftJoin,
    Limit,
    Offset,
    OrderBy,
)

__all__ = [
    "DEFAULT_ALIAS",
    "AndX",
    "BaseSpecification",
    "Between",
    "Comparison",
    "CountOf",
    "Distinct",
    "Eq",
    "FieldFilter",
    "Filter",
    "GroupBy",
    "Gt",
    "Gte",
    "Having",
    "In",
    "InnerJoin",
    "IsNotNull",
    "IsNull",
    "Join",
    "LeftJoin",
    "Like",
    "Limit",
    "LogicX",
    "Lt",
    "Lte",
    "Neq",
    "Not",
    "NotIn",
    "Offset",
    "OrX",
    "OrderBy",
    "QueryModifier",
    "Specification",
    "apply_specification",
]
