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

"""Normalization of raw RDS DB instance descriptions."""

from .constants import ENGINE_FAMILY_MAP, ENGINE_FAMILY_MYSQL
from .exceptions import MalformedResponseException, UnknownEngineException
from .models import DatabaseState
from loguru import logger
from typing import Any, Dict, Iterable, List


def _require(instance: Dict[str, Any], value: Any, field: str) -> Any:
    if value is None or value == '':
        raise MalformedResponseException('instance', instance.get('DBInstanceIdentifier'), field)
    return value


def parse_rds_instance(instance: Dict[str, Any]) -> DatabaseState:
    """Convert one item of a describe_db_instances response into a DatabaseState.

    Plain MySQL replicas are grouped under their replication source, primaries under their
    own identifier. Aurora instances are grouped under their DB cluster.

    Args:
        instance: Raw instance data from the AWS API

    Returns:
        DatabaseState: The normalized instance

    Raises:
        UnknownEngineException: If the engine is not MySQL or Aurora MySQL
        MalformedResponseException: If a field required for monitoring is missing
    """
    identifier = _require(instance, instance.get('DBInstanceIdentifier'), 'DBInstanceIdentifier')

    endpoint = instance.get('Endpoint')
    if not isinstance(endpoint, dict):
        raise MalformedResponseException('instance', identifier, 'Endpoint')
    hostname = _require(instance, endpoint.get('Address'), 'Endpoint.Address')
    port = _require(instance, endpoint.get('Port'), 'Endpoint.Port')

    subnet_group = instance.get('DBSubnetGroup') or {}
    vpc = subnet_group.get('VpcId') or ''

    engine = instance.get('Engine')
    family = ENGINE_FAMILY_MAP.get(engine)
    if family is None:
        raise UnknownEngineException(engine)

    mysql_replication = False
    if family == ENGINE_FAMILY_MYSQL:
        source = instance.get('ReadReplicaSourceDBInstanceIdentifier')
        if source:
            # a replica is grouped with its primary
            cluster = source
            mysql_replication = True
        else:
            cluster = identifier
    else:
        cluster = _require(instance, instance.get('DBClusterIdentifier'), 'DBClusterIdentifier')

    return DatabaseState(
        engine=family,
        cluster=cluster,
        identifier=identifier,
        hostname=hostname,
        port=int(port),
        vpc=vpc,
        mysql_replication=mysql_replication,
    )


def parse_rds_instances(
    instances: Iterable[Dict[str, Any]], skip_invalid: bool = False
) -> List[DatabaseState]:
    """Normalize every raw instance description.

    Args:
        instances: Raw instance data from the AWS API
        skip_invalid: Log and skip instances that can't be normalized instead of failing

    Returns:
        List[DatabaseState]: One state per accepted instance, in input order
    """
    states = []
    for instance in instances:
        try:
            states.append(parse_rds_instance(instance))
        except (UnknownEngineException, MalformedResponseException) as error:
            if not skip_invalid:
                raise
            logger.warning(f'Skipping DB instance: {error}')
    return states
