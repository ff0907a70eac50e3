# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
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

"""Filtering and ordering of normalized DB instances."""

from .credentials import CredentialsStore
from .models import DatabaseState
from typing import Iterable, List


def filter_by_vpc(states: Iterable[DatabaseState], vpc_id: str) -> List[DatabaseState]:
    """Keep the instances living in the given VPC (exact match)."""
    return [state for state in states if state.vpc == vpc_id]


def filter_by_credentials(
    states: Iterable[DatabaseState], credentials: CredentialsStore
) -> List[DatabaseState]:
    """Keep the instances whose cluster has a section in the credentials file.

    Instances without a section are dropped silently: there is no way to connect to them.
    """
    return [state for state in states if credentials.has_section(state.cluster)]


def sort_database_states(states: Iterable[DatabaseState]) -> List[DatabaseState]:
    """Order instances by cluster, then by instance identifier."""
    return sorted(states, key=lambda state: (state.cluster, state.identifier))
