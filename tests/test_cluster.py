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

"""Tests for cluster module."""

import pytest
from awslabs.rds_datadog_discovery.cluster import (
    collect_cluster_members,
    find_aurora_member,
    parse_cluster_members,
)
from awslabs.rds_datadog_discovery.exceptions import (
    ClusterMemberNotFoundException,
    MalformedResponseException,
)
from awslabs.rds_datadog_discovery.models import ClusterMember


class TestParseClusterMembers:
    """Test cases for parse_cluster_members function."""

    def test_members(self, sample_db_cluster):
        """Test that every member is listed with its writer flag."""
        members = parse_cluster_members(sample_db_cluster)

        assert members == [
            ClusterMember(
                cluster='test-db-cluster', instance_identifier='test-db-instance-1', is_writer=True
            ),
            ClusterMember(
                cluster='test-db-cluster',
                instance_identifier='test-db-instance-2',
                is_writer=False,
            ),
        ]

    def test_cluster_without_members(self, db_cluster_factory):
        """Test that a cluster without members yields nothing."""
        assert parse_cluster_members(db_cluster_factory('empty', [])) == []

    def test_missing_cluster_identifier(self, sample_db_cluster):
        """Test that a cluster without identifier is malformed."""
        del sample_db_cluster['DBClusterIdentifier']

        with pytest.raises(MalformedResponseException) as excinfo:
            parse_cluster_members(sample_db_cluster)

        assert excinfo.value.exit_code == 18

    def test_missing_writer_flag(self, sample_db_cluster):
        """Test that a member without writer flag is malformed."""
        del sample_db_cluster['DBClusterMembers'][0]['IsClusterWriter']

        with pytest.raises(MalformedResponseException, match='IsClusterWriter'):
            parse_cluster_members(sample_db_cluster)


class TestCollectClusterMembers:
    """Test cases for collect_cluster_members function."""

    def test_concatenates_clusters(self, db_cluster_factory):
        """Test that members of all clusters end up in one list."""
        clusters = [
            db_cluster_factory('a', [('a-1', True), ('a-2', False)]),
            db_cluster_factory('b', [('b-1', True)]),
        ]

        members = collect_cluster_members(clusters)

        assert [(m.cluster, m.instance_identifier) for m in members] == [
            ('a', 'a-1'),
            ('a', 'a-2'),
            ('b', 'b-1'),
        ]


class TestFindAuroraMember:
    """Test cases for find_aurora_member function."""

    @pytest.fixture
    def members(self):
        """Return members of two clusters."""
        return [
            ClusterMember(cluster='a', instance_identifier='a-1', is_writer=True),
            ClusterMember(cluster='a', instance_identifier='a-2', is_writer=False),
        ]

    def test_find(self, members):
        """Test finding a member."""
        assert find_aurora_member(members, 'a-2') == members[1]

    def test_find_case_insensitive(self, members):
        """Test that identifiers are compared case-insensitively."""
        assert find_aurora_member(members, 'A-1') == members[0]

    def test_not_found(self, members):
        """Test that a missing member is an error."""
        with pytest.raises(ClusterMemberNotFoundException) as excinfo:
            find_aurora_member(members, 'a-3')

        assert excinfo.value.identifier == 'a-3'
        assert excinfo.value.exit_code == 21

    def test_no_prefix_match(self, members):
        """Test that only exact identifiers match."""
        with pytest.raises(ClusterMemberNotFoundException):
            find_aurora_member(members, 'a-')
