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
"""ResultModifier — a step applied to a :class:`~flyspec.query.Query` before it runs."""

from __future__ import annotations

from abc import ABC, abstractmethod

from flyspec.query.query import Query


class ResultModifier(ABC):
    """Adjusts how a built query executes or hydrates. Changes *query* in place."""

    @abstractmethod
    def modify(self, query: Query) -> None: ...
