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

"""Constants for the RDS Datadog discovery tool."""

# AWS RDS Engine Types
ENGINE_AURORA = 'aurora'
ENGINE_AURORA_MYSQL = 'aurora-mysql'
ENGINE_MYSQL = 'mysql'

# Engine families understood by the config synthesizer
ENGINE_FAMILY_AURORA = 'aurora'
ENGINE_FAMILY_MYSQL = 'mysql'

ENGINE_FAMILY_MAP = {
    ENGINE_AURORA: ENGINE_FAMILY_AURORA,
    ENGINE_AURORA_MYSQL: ENGINE_FAMILY_AURORA,
    ENGINE_MYSQL: ENGINE_FAMILY_MYSQL,
}

# CLI defaults
DEFAULT_PASSWORDS_FILE = 'passwords.ini'
DEFAULT_INTERFACE = 'eth0'
DEFAULT_REGION = 'us-west-2'
DEFAULT_VPC_ID = 'dummy'
DEFAULT_LOG_LEVEL = 'INFO'
LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')

# Credentials file defaults
DEFAULT_USERNAME = 'dummy_username'
DEFAULT_PASSWORD = 'dummy_password'
DEFAULT_CONNECT_TIMEOUT = 1
DEFAULT_EXTRA_PERFORMANCE = False

# Credentials file keys
KEY_USER = 'user'
KEY_PASSWORD = 'password'
KEY_CONNECT_TIMEOUT = 'connect_timeout'
KEY_EXTRA_PERFORMANCE = 'extra_performance'
KEY_RENAME_CLUSTER = 'rename_cluster'
KEY_RENAME_INSTANCE_PREFIX = 'rename_instance_'

# Datadog tag names
TAG_INSTANCE = 'dbinstanceidentifier'
TAG_DATABASE_GROUP = 'database_group'

# EC2 instance metadata service
METADATA_BASE_URL = 'http://169.254.169.254/latest'
METADATA_TOKEN_TTL_SECONDS = 21600
METADATA_TIMEOUT_SECONDS = 2
METADATA_AVAILABILITY_PATH = 'meta-data/instance-id'
METADATA_REGION_PATH = 'meta-data/placement/region'
METADATA_VPC_PATH = 'meta-data/network/interfaces/macs/{mac}/vpc-id'

# Exit codes, one per fatal failure site
EXIT_CREDENTIALS_FILE = 10
EXIT_AWS_CONFIGURATION = 11
EXIT_DESCRIBE_INSTANCES = 12
EXIT_METADATA_REGION = 13
EXIT_INTERFACE_ADDRESS = 14
EXIT_METADATA_VPC = 15
EXIT_METADATA_UNAVAILABLE = 16
EXIT_DESCRIBE_CLUSTERS = 17
EXIT_MALFORMED_CLUSTER = 18
EXIT_MALFORMED_INSTANCE = 19
EXIT_UNKNOWN_ENGINE = 20
EXIT_CLUSTER_MEMBER_NOT_FOUND = 21
EXIT_UNKNOWN_ENGINE_SYNTHESIS = 22

# Error Messages
ERROR_CREDENTIALS_FILE = "Can't open INI file: {}"
ERROR_AWS_CONFIGURATION = 'Unable to load AWS SDK config: {}'
ERROR_DESCRIBE = 'Failed to describe {}: {}'
ERROR_METADATA_UNAVAILABLE = (
    "Can't talk to EC2 metadata endpoint. See the help to specify VPC+Region manually."
)
ERROR_METADATA_REGION = "Can't detect EC2 metadata region: {}"
ERROR_INTERFACE_ADDRESS = "Can't detect MAC address for {}"
ERROR_METADATA_VPC = "Can't discover VPC: {}"
ERROR_UNKNOWN_ENGINE = 'Unknown RDS engine type: {}'
ERROR_MALFORMED_INSTANCE = 'Malformed DB instance description ({}): missing {}'
ERROR_MALFORMED_CLUSTER = 'Malformed DB cluster description ({}): missing {}'
ERROR_CLUSTER_MEMBER_NOT_FOUND = "Can't find Aurora cluster member: {}"
