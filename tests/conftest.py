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

"""Global pytest fixtures for RDS Datadog discovery tests."""

import os
import pytest
from awslabs.rds_datadog_discovery.common.connection import RDSConnectionManager
from awslabs.rds_datadog_discovery.credentials import CredentialsStore
from unittest.mock import MagicMock, patch


@pytest.fixture(scope='session', autouse=True)
def tests_setup_and_teardown():
    """Mock environment and module variables for testing."""
    # Will be executed before the first test
    old_environ = dict(os.environ)
    os.environ.update(
        {
            'AWS_DEFAULT_REGION': 'us-east-1',  # pragma: allowlist secret
            'AWS_ACCESS_KEY_ID': 'mock_access_key',  # pragma: allowlist secret
            'AWS_SECRET_ACCESS_KEY': 'mock_secret_key',  # pragma: allowlist secret
        }
    )

    yield
    # Will be executed after the last test
    os.environ.clear()
    os.environ.update(old_environ)


@pytest.fixture
def mock_rds_client():
    """Fixture providing a mock RDS client for tests.

    Resets the RDS connection before and after the test.
    Returns a mock client that's automatically patched into the RDSConnectionManager.
    """
    RDSConnectionManager._client = None

    mock_client = MagicMock()

    with patch.object(RDSConnectionManager, 'get_connection', return_value=mock_client) as _:
        yield mock_client

    RDSConnectionManager._client = None


def make_db_instance(
    identifier,
    engine='mysql',
    vpc_id='vpc-12345678',
    cluster=None,
    source=None,
    port=3306,
):
    """Build a describe_db_instances item with the fields discovery relies on."""
    instance = {
        'DBInstanceIdentifier': identifier,
        'DBInstanceClass': 'db.r5.large',
        'Engine': engine,
        'DBInstanceStatus': 'available',
        'Endpoint': {
            'Address': f'{identifier}.abc123.us-east-1.rds.amazonaws.com',
            'Port': port,
            'HostedZoneId': 'Z2R2ITUGPM61AM',
        },
        'DBSubnetGroup': {
            'DBSubnetGroupName': 'default',
            'DBSubnetGroupDescription': 'default',
            'VpcId': vpc_id,
            'SubnetGroupStatus': 'Complete',
            'Subnets': [],
        },
        'ReadReplicaDBInstanceIdentifiers': [],
    }
    if cluster is not None:
        instance['DBClusterIdentifier'] = cluster
    if source is not None:
        instance['ReadReplicaSourceDBInstanceIdentifier'] = source
    return instance


def make_db_cluster(identifier, members):
    """Build a describe_db_clusters item from (instance identifier, is writer) pairs."""
    return {
        'DBClusterIdentifier': identifier,
        'Status': 'available',
        'Engine': 'aurora-mysql',
        'DBClusterMembers': [
            {
                'DBInstanceIdentifier': instance_id,
                'IsClusterWriter': is_writer,
                'DBClusterParameterGroupStatus': 'in-sync',
                'PromotionTier': 1,
            }
            for instance_id, is_writer in members
        ],
    }


@pytest.fixture
def sample_db_instance():
    """Return a sample DB instance response."""
    return {
        'DBInstanceIdentifier': 'test-db-instance',
        'DBInstanceClass': 'db.t3.micro',
        'Engine': 'mysql',
        'EngineVersion': '8.0.35',
        'DBInstanceStatus': 'available',
        'MasterUsername': 'admin',
        'DBName': 'testdb',
        'Endpoint': {
            'Address': 'test-db-instance.abc123.us-east-1.rds.amazonaws.com',
            'Port': 3306,
            'HostedZoneId': 'Z2R2ITUGPM61AM',
        },
        'AllocatedStorage': 20,
        'VpcSecurityGroups': [{'VpcSecurityGroupId': 'sg-12345678', 'Status': 'active'}],
        'AvailabilityZone': 'us-east-1a',
        'DBSubnetGroup': {
            'DBSubnetGroupName': 'default',
            'DBSubnetGroupDescription': 'default',
            'VpcId': 'vpc-12345678',
            'SubnetGroupStatus': 'Complete',
            'Subnets': [],
        },
        'MultiAZ': False,
        'ReadReplicaDBInstanceIdentifiers': [],
        'PubliclyAccessible': False,
        'StorageType': 'gp2',
        'DbiResourceId': 'db-ABCDEFGHIJKLMNOPQRSTUVWXYZ',  # pragma: allowlist secret
        'DBInstanceArn': 'arn:aws:rds:us-east-1:123456789012:db:test-db-instance',
        'TagList': [{'Key': 'Environment', 'Value': 'Test'}],
    }


@pytest.fixture
def sample_aurora_instance():
    """Return a sample Aurora MySQL DB instance response."""
    return make_db_instance('test-db-instance-1', engine='aurora-mysql', cluster='test-db-cluster')


@pytest.fixture
def sample_db_cluster():
    """Return a sample DB cluster response."""
    return {
        'DBClusterIdentifier': 'test-db-cluster',
        'Status': 'available',
        'Engine': 'aurora-mysql',
        'EngineVersion': '5.7.mysql_aurora.2.10.2',
        'DBClusterArn': 'arn:aws:rds:us-east-1:123456789012:cluster:test-db-cluster',
        'Endpoint': 'test-db-cluster.cluster-abc123.us-east-1.rds.amazonaws.com',
        'ReaderEndpoint': 'test-db-cluster.cluster-ro-abc123.us-east-1.rds.amazonaws.com',
        'Port': 3306,
        'MultiAZ': True,
        'EngineMode': 'provisioned',
        'DBClusterMembers': [
            {
                'DBInstanceIdentifier': 'test-db-instance-1',
                'IsClusterWriter': True,
                'DBClusterParameterGroupStatus': 'in-sync',
                'PromotionTier': 1,
            },
            {
                'DBInstanceIdentifier': 'test-db-instance-2',
                'IsClusterWriter': False,
                'DBClusterParameterGroupStatus': 'in-sync',
                'PromotionTier': 1,
            },
        ],
        'DBSubnetGroup': 'default',
        'TagList': [{'Key': 'Environment', 'Value': 'Production'}],
    }


@pytest.fixture
def empty_credentials():
    """Return a credentials store without any section."""
    return CredentialsStore.from_string('')


@pytest.fixture
def passwords_file(tmp_path):
    """Write a credentials file and return its path."""
    path = tmp_path / 'passwords.ini'
    path.write_text(
        'user = dd_default\n'
        '\n'
        '[test-db-cluster]\n'
        'user = dd_user\n'
        'password = dd_password\n'
        '\n'
        '[test-db-instance]\n'
        'password = mysql_password\n'
        'connect_timeout = 5\n'
    )
    return str(path)


@pytest.fixture
def db_instance_factory():
    """Return a builder for describe_db_instances items."""
    return make_db_instance


@pytest.fixture
def db_cluster_factory():
    """Return a builder for describe_db_clusters items."""
    return make_db_cluster
