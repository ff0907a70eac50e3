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

"""End-to-end generation of the Datadog configuration from raw RDS descriptions."""

from .cluster import collect_cluster_members
from .common.utils import log_database_states
from .credentials import CredentialsStore
from .filters import filter_by_credentials, filter_by_vpc, sort_database_states
from .models import DatadogConfig
from .normalizer import parse_rds_instances
from .synthesizer import create_datadog_configs
from typing import Any, Dict, Iterable


def build_datadog_config(
    raw_instances: Iterable[Dict[str, Any]],
    raw_clusters: Iterable[Dict[str, Any]],
    vpc_id: str,
    credentials: CredentialsStore,
    skip_invalid: bool = False,
) -> DatadogConfig:
    """Turn RDS describe results into a Datadog MySQL check configuration.

    Cluster members are collected from every cluster before any filtering. Instances are
    normalized, sorted by cluster then identifier, narrowed to the VPC, narrowed to the
    clusters present in the credentials file and finally rendered as check entries. The
    candidate set is logged after each step.

    Args:
        raw_instances: Items of describe_db_instances
        raw_clusters: Items of describe_db_clusters
        vpc_id: Only instances in this VPC are monitored
        credentials: The credentials store
        skip_invalid: Skip instances that can't be normalized instead of failing

    Returns:
        DatadogConfig: The configuration document
    """
    members = collect_cluster_members(raw_clusters)

    states = sort_database_states(parse_rds_instances(raw_instances, skip_invalid=skip_invalid))
    log_database_states('Original Instances', states)

    states = filter_by_vpc(states, vpc_id)
    log_database_states('VPC Filtered Instances', states)

    states = filter_by_credentials(states, credentials)
    log_database_states('Credentials from INI', states)

    return DatadogConfig(instances=create_datadog_configs(states, members, credentials))
