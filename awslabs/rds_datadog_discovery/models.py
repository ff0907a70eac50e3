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

"""Data models for RDS discovery and the generated Datadog configuration."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class ClusterMember(BaseModel):
    """Role of one DB instance within a DB cluster."""

    model_config = ConfigDict(frozen=True)

    cluster: str = Field(description='The DB cluster identifier')
    instance_identifier: str = Field(description='The DB instance identifier of the member')
    is_writer: bool = Field(description='Whether the member is the cluster writer')


class DatabaseState(BaseModel):
    """Normalized view of one discoverable DB instance."""

    model_config = ConfigDict(frozen=True)

    engine: str = Field(description="The engine family, either 'mysql' or 'aurora'")
    cluster: str = Field(description='The cluster (or replication group) identifier')
    identifier: str = Field(description='The DB instance identifier')
    hostname: str = Field(description='The DNS address of the instance endpoint')
    port: int = Field(description='The port the database engine is listening on')
    vpc: str = Field('', description='The VPC the instance lives in')
    username: Optional[str] = Field(None, description='Monitoring user, if already resolved')
    password: Optional[str] = Field(None, description='Monitoring password, if already resolved')
    mysql_replication: bool = Field(
        False, description='Whether this is a MySQL read replica of another instance'
    )
    aurora_read_replica: bool = Field(
        False, description='Whether this is an Aurora reader instance'
    )


class DatadogOptions(BaseModel):
    """Metric toggles of the Datadog MySQL check."""

    replication: bool = Field(False, description='Collect replication metrics')
    extra_status_metrics: bool = Field(False, description='Collect extra status metrics')
    extra_innodb_metrics: bool = Field(False, description='Collect extra InnoDB metrics')
    disable_innodb_metrics: bool = Field(False, description='Skip InnoDB metrics entirely')
    extra_performance_metrics: bool = Field(
        False, description='Collect performance schema metrics'
    )
    schema_size_metrics: bool = Field(False, description='Collect schema size metrics')
    processlist_size: bool = Field(False, description='Collect process list size')


class DatadogInstanceConfig(BaseModel):
    """One entry of the Datadog MySQL check 'instances' list."""

    server: str = Field(description='Host to connect to')
    user: str = Field(description='Monitoring user')
    password: str = Field(description='Monitoring password')
    port: int = Field(description='Port to connect to')
    connect_timeout: int = Field(0, description='Connection timeout in seconds')
    tags: List[str] = Field(default_factory=list, description='Tags attached to every metric')
    options: DatadogOptions = Field(default_factory=DatadogOptions)

    def to_dict(self) -> Dict[str, Any]:
        """Render the entry with the Datadog key names.

        Returns:
            Dict[str, Any]: The entry, omitting an unset connect_timeout and empty tags
        """
        result: Dict[str, Any] = {
            'server': self.server,
            'user': self.user,
            'pass': self.password,
            'port': self.port,
        }
        if self.connect_timeout:
            result['connect_timeout'] = self.connect_timeout
        if self.tags:
            result['tags'] = list(self.tags)
        result['options'] = self.options.model_dump()
        return result


class DatadogConfig(BaseModel):
    """The complete Datadog MySQL check configuration document."""

    init_config: List[str] = Field(default_factory=list)
    instances: List[DatadogInstanceConfig] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Render the document as plain data ready for serialization."""
        return {
            'init_config': list(self.init_config),
            'instances': [instance.to_dict() for instance in self.instances],
        }
