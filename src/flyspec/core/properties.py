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
"""Settings bound from the ``flyspec.specification`` config section."""

from __future__ import annotations

from pydantic import BaseModel, Field

from flyspec.core.config import config_properties


@config_properties(prefix="flyspec.specification")
class SpecificationProperties(BaseModel):
    """Repository-level defaults.

    Attributes:
        default_alias: Alias the root entity is registered under when a
            repository builds a query without an explicit alias.
        log_queries: Log the compiled SQL of every executed query at debug level.
    """

    default_alias: str = Field(default="e", min_length=1)
    log_queries: bool = False
