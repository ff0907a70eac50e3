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

"""General utility functions for the RDS Datadog discovery tool."""

from ..models import DatabaseState
from botocore.client import BaseClient
from loguru import logger
from typing import Any, Dict, Iterable, List


def handle_paginated_aws_api_call(
    client: BaseClient,
    paginator_name: str,
    operation_parameters: Dict[str, Any],
    result_key: str,
) -> List[Dict[str, Any]]:
    """Fetch all results using AWS API pagination.

    Args:
        client: Boto3 client to use for the API call
        paginator_name: Name of the paginator to use (e.g. 'describe_db_clusters')
        operation_parameters: Parameters to pass to the paginator
        result_key: Key in the response that contains the list of items

    Returns:
        List of result items
    """
    results = []
    paginator = client.get_paginator(paginator_name)
    page_iterator = paginator.paginate(**operation_parameters)
    for page in page_iterator:
        results.extend(page.get(result_key, []))

    return results


def log_database_states(title: str, states: Iterable[DatabaseState]) -> None:
    """Write the current candidate set to the log, one instance per line."""
    logger.info(title)
    for state in states:
        logger.info(f'{state.cluster} {state.identifier}')
