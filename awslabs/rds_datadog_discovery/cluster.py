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

"""Cluster membership resolution for Aurora DB clusters."""

from .exceptions import ClusterMemberNotFoundException, MalformedResponseException
from .models import ClusterMember
from typing import Any, Dict, Iterable, List


def parse_cluster_members(cluster: Dict[str, Any]) -> List[ClusterMember]:
    """List the members of one item of a describe_db_clusters response.

    Args:
        cluster: Raw cluster data from the AWS API

    Returns:
        List[ClusterMember]: One fact per declared member, writer flag taken verbatim
    """
    cluster_id = cluster.get('DBClusterIdentifier')
    if not cluster_id:
        raise MalformedResponseException('cluster', None, 'DBClusterIdentifier')

    members = []
    for member in cluster.get('DBClusterMembers', []):
        instance_id = member.get('DBInstanceIdentifier')
        if not instance_id:
            raise MalformedResponseException(
                'cluster', cluster_id, 'DBClusterMembers.DBInstanceIdentifier'
            )
        is_writer = member.get('IsClusterWriter')
        if is_writer is None:
            raise MalformedResponseException(
                'cluster', cluster_id, 'DBClusterMembers.IsClusterWriter'
            )
        members.append(
            ClusterMember(
                cluster=cluster_id,
                instance_identifier=instance_id,
                is_writer=bool(is_writer),
            )
        )
    return members


def collect_cluster_members(clusters: Iterable[Dict[str, Any]]) -> List[ClusterMember]:
    """Flatten the members of all clusters into a single list."""
    members: List[ClusterMember] = []
    for cluster in clusters:
        members.extend(parse_cluster_members(cluster))
    return members


def find_aurora_member(members: Iterable[ClusterMember], identifier: str) -> ClusterMember:
    """Find the membership fact of a DB instance.

    Args:
        members: All known cluster members
        identifier: The DB instance identifier, compared case-insensitively

    Returns:
        ClusterMember: The first matching member

    Raises:
        ClusterMemberNotFoundException: If no cluster lists the instance
    """
    wanted = identifier.casefold()
    for member in members:
        if member.instance_identifier.casefold() == wanted:
            return member
    raise ClusterMemberNotFoundException(identifier)
