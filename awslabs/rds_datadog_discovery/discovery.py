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

"""Retrieval of raw DB instance and DB cluster descriptions from RDS."""

from .common.utils import handle_paginated_aws_api_call
from .constants import EXIT_DESCRIBE_CLUSTERS, EXIT_DESCRIBE_INSTANCES
from .exceptions import DescribeFailedException
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger
from typing import Any, Dict, List


def _describe(client: BaseClient, paginator_name: str, result_key: str) -> List[Dict[str, Any]]:
    return handle_paginated_aws_api_call(
        client=client,
        paginator_name=paginator_name,
        operation_parameters={},
        result_key=result_key,
    )


def describe_db_instances(rds_client: BaseClient) -> List[Dict[str, Any]]:
    """Fetch every DB instance in the client's region.

    Raises:
        DescribeFailedException: If the API call fails
    """
    logger.info('Describing DB instances')
    try:
        instances = _describe(rds_client, 'describe_db_instances', 'DBInstances')
    except ClientError as error:
        error_code = error.response['Error']['Code']
        raise DescribeFailedException(
            'DB instances', error_code, EXIT_DESCRIBE_INSTANCES
        ) from error
    except BotoCoreError as error:
        raise DescribeFailedException('DB instances', str(error), EXIT_DESCRIBE_INSTANCES) from error
    logger.info(f'Found {len(instances)} DB instances')
    return instances


def describe_db_clusters(rds_client: BaseClient) -> List[Dict[str, Any]]:
    """Fetch every DB cluster in the client's region.

    Raises:
        DescribeFailedException: If the API call fails
    """
    logger.info('Describing DB clusters')
    try:
        clusters = _describe(rds_client, 'describe_db_clusters', 'DBClusters')
    except ClientError as error:
        error_code = error.response['Error']['Code']
        raise DescribeFailedException(
            'DB clusters', error_code, EXIT_DESCRIBE_CLUSTERS
        ) from error
    except BotoCoreError as error:
        raise DescribeFailedException('DB clusters', str(error), EXIT_DESCRIBE_CLUSTERS) from error
    logger.info(f'Found {len(clusters)} DB clusters')
    return clusters
