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
"""Query by Example: build specifications from kwargs, dicts or example objects.

Example::

    spec = FilterUtils.by(role="admin", active=True)
    spec = FilterUtils.from_dict({"role": "admin", "name": None})   # name skipped
    spec = FilterUtils.from_example(UserFilter(role="admin"))

    # Richer predicates combine with the node operators
    spec = FilterUtils.by(active=True) & Spec.gte("age", 18)
"""

from __future__ import annotations

import dataclasses
from typing import Any

from flyspec.specification.filter import Eq
from flyspec.specification.logic import AndX


class FilterUtils:
    """Turn field/value pairs into an ``AndX`` of ``Eq`` filters."""

    @classmethod
    def by(cls, **kwargs: Any) -> AndX:
        """Every keyword argument becomes an equality filter."""
        return cls._combine_and(kwargs)

    @classmethod
    def from_dict(cls, filters: dict[str, Any]) -> AndX:
        """Equality filters for the non-``None`` entries of *filters*."""
        return cls._combine_and({field: value for field, value in filters.items() if value is not None})

    @classmethod
    def from_example(cls, example: Any) -> AndX:
        """Equality filters for the non-``None`` public fields of *example*.

        Works with dataclass instances and any object with ``__dict__``;
        attributes starting with an underscore (including SQLAlchemy's
        ``_sa_instance_state``) are ignored.
        """
        if dataclasses.is_dataclass(example) and not isinstance(example, type):
            fields = {f.name: getattr(example, f.name) for f in dataclasses.fields(example)}
        else:
            fields = vars(example)
        return cls._combine_and(
            {name: value for name, value in fields.items() if value is not None and not name.startswith("_")}
        )

    @staticmethod
    def _combine_and(fields: dict[str, Any]) -> AndX:
        return AndX(*(Eq(field, value) for field, value in fields.items()))
