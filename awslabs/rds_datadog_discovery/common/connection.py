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

"""Connection management for the AWS services used by the RDS Datadog discovery tool."""

import boto3
import os
from botocore.config import Config
from botocore.exceptions import BotoCoreError
from ..exceptions import AWSConfigurationException
from typing import Any, Optional


class BaseConnectionManager:
    """Base class for AWS service connection managers."""

    _client: Optional[Any] = None
    _service_name: str = ''
    _env_prefix: str = ''
    _region: Optional[str] = None
    _profile: Optional[str] = None

    @classmethod
    def initialize(cls, region: Optional[str] = None, profile: Optional[str] = None):
        """Initialize the connection manager with a region and profile.

        Args:
            region (str): AWS region to query
            profile (str): AWS profile to use for credentials
        """
        cls._region = region or os.environ.get('AWS_REGION', 'us-east-1')
        cls._profile = profile or os.environ.get('AWS_PROFILE') or None

        cls._client = None

    @classmethod
    def get_connection(cls) -> Any:
        """Get or create an AWS service client connection.

        Each API call is attempted exactly once.

        Returns:
            boto3.client: An AWS service client

        Raises:
            AWSConfigurationException: If the SDK configuration can't be loaded
        """
        if cls._client is None:
            region = cls._region or os.environ.get('AWS_REGION', 'us-east-1')
            connect_timeout = int(os.environ.get(f'{cls._env_prefix}_CONNECT_TIMEOUT', '5'))
            read_timeout = int(os.environ.get(f'{cls._env_prefix}_READ_TIMEOUT', '30'))

            config = Config(
                retries={'max_attempts': 1, 'mode': 'standard'},
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                user_agent_extra='RDSDatadogDiscovery',
            )

            try:
                if cls._profile:
                    session = boto3.Session(profile_name=cls._profile, region_name=region)
                else:
                    session = boto3.Session(region_name=region)
                cls._client = session.client(service_name=cls._service_name, config=config)
            except BotoCoreError as error:
                raise AWSConfigurationException(str(error)) from error

        return cls._client

    @classmethod
    def close_connection(cls) -> None:
        """Close the AWS service client connection."""
        if cls._client is not None:
            cls._client.close()
            cls._client = None


class RDSConnectionManager(BaseConnectionManager):
    """Manages connection to RDS using boto3."""

    _client: Optional[Any] = None
    _service_name = 'rds'
    _env_prefix = 'RDS'
