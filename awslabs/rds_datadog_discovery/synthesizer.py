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

"""Synthesis of Datadog MySQL check entries from normalized DB instances."""

from .cluster import find_aurora_member
from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_EXTRA_PERFORMANCE,
    DEFAULT_PASSWORD,
    ENGINE_FAMILY_AURORA,
    ENGINE_FAMILY_MYSQL,
    EXIT_UNKNOWN_ENGINE_SYNTHESIS,
    KEY_CONNECT_TIMEOUT,
    KEY_EXTRA_PERFORMANCE,
    KEY_PASSWORD,
    KEY_RENAME_CLUSTER,
    KEY_RENAME_INSTANCE_PREFIX,
    KEY_USER,
    TAG_DATABASE_GROUP,
    TAG_INSTANCE,
)
from .credentials import CredentialsStore
from .exceptions import UnknownEngineException
from .models import ClusterMember, DatabaseState, DatadogInstanceConfig, DatadogOptions
from loguru import logger
from typing import Iterable, List, Sequence


def build_tags(state: DatabaseState, credentials: CredentialsStore) -> List[str]:
    """Build the instance and database group tags of one DB instance.

    Both tag values can be renamed from the cluster's credentials section: the group with
    ``rename_cluster``, the instance with ``rename_instance_<instance identifier>``.
    """
    cluster_tag = credentials.get_string(state.cluster, KEY_RENAME_CLUSTER, state.cluster)
    instance_tag = credentials.get_string(
        state.cluster, KEY_RENAME_INSTANCE_PREFIX + state.identifier, state.identifier
    )
    return [f'{TAG_INSTANCE}:{instance_tag}', f'{TAG_DATABASE_GROUP}:{cluster_tag}']


def build_options(
    state: DatabaseState, members: Sequence[ClusterMember], credentials: CredentialsStore
) -> DatadogOptions:
    """Choose the metric toggles for one DB instance.

    Aurora readers can't report InnoDB metrics, so they are disabled there; the writer
    gets the extra InnoDB metrics instead. Aurora replication isn't visible to the MySQL
    check. Plain MySQL always gets extra InnoDB metrics, and replication metrics only on
    read replicas.

    Raises:
        ClusterMemberNotFoundException: If an Aurora instance isn't listed by any cluster
        UnknownEngineException: If the state carries an engine family other than MySQL or Aurora
    """
    options = DatadogOptions(
        schema_size_metrics=True,
        processlist_size=True,
        extra_status_metrics=True,
        extra_performance_metrics=credentials.get_bool(
            state.cluster, KEY_EXTRA_PERFORMANCE, DEFAULT_EXTRA_PERFORMANCE
        ),
    )

    if state.engine == ENGINE_FAMILY_AURORA:
        member = find_aurora_member(members, state.identifier)
        options.replication = False
        options.disable_innodb_metrics = not member.is_writer
        options.extra_innodb_metrics = member.is_writer
    elif state.engine == ENGINE_FAMILY_MYSQL:
        options.disable_innodb_metrics = False
        options.extra_innodb_metrics = True
        options.replication = state.mysql_replication
    else:
        raise UnknownEngineException(state.engine, exit_code=EXIT_UNKNOWN_ENGINE_SYNTHESIS)

    return options


def resolve_database_state(
    state: DatabaseState,
    members: Sequence[ClusterMember],
    credentials: CredentialsStore,
    default_user: str,
) -> DatabaseState:
    """Fill in the monitoring credentials and the Aurora reader flag of one DB instance.

    Raises:
        ClusterMemberNotFoundException: If an Aurora instance isn't listed by any cluster
    """
    update = {
        'username': credentials.get_string(state.cluster, KEY_USER, default_user),
        'password': credentials.get_string(state.cluster, KEY_PASSWORD, DEFAULT_PASSWORD),
    }
    if state.engine == ENGINE_FAMILY_AURORA:
        update['aurora_read_replica'] = not find_aurora_member(members, state.identifier).is_writer
    return state.model_copy(update=update)


def create_datadog_config(
    state: DatabaseState,
    members: Sequence[ClusterMember],
    credentials: CredentialsStore,
    default_user: str,
) -> DatadogInstanceConfig:
    """Create the Datadog MySQL check entry for one DB instance.

    Args:
        state: The DB instance to monitor
        members: All known cluster members, used for Aurora writer detection
        credentials: The credentials store
        default_user: User for clusters that don't configure their own

    Returns:
        DatadogInstanceConfig: The check entry
    """
    state = resolve_database_state(state, members, credentials, default_user)
    return DatadogInstanceConfig(
        server=state.hostname,
        port=state.port,
        connect_timeout=credentials.get_int(
            state.cluster, KEY_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT
        ),
        user=state.username,
        password=state.password,
        tags=build_tags(state, credentials),
        options=build_options(state, members, credentials),
    )


def create_datadog_configs(
    states: Iterable[DatabaseState],
    members: Sequence[ClusterMember],
    credentials: CredentialsStore,
) -> List[DatadogInstanceConfig]:
    """Create one Datadog MySQL check entry per DB instance, preserving order."""
    default_user = credentials.global_default_user()
    configs = []
    for state in states:
        config = create_datadog_config(state, members, credentials, default_user)
        logger.debug(f'Generated Datadog config for {state.cluster} {state.identifier}')
        configs.append(config)
    return configs
