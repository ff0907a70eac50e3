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

"""Custom exceptions for the RDS Datadog discovery tool."""

from .constants import (
    ERROR_AWS_CONFIGURATION,
    ERROR_CLUSTER_MEMBER_NOT_FOUND,
    ERROR_CREDENTIALS_FILE,
    ERROR_DESCRIBE,
    ERROR_INTERFACE_ADDRESS,
    ERROR_MALFORMED_CLUSTER,
    ERROR_MALFORMED_INSTANCE,
    ERROR_METADATA_REGION,
    ERROR_METADATA_UNAVAILABLE,
    ERROR_METADATA_VPC,
    ERROR_UNKNOWN_ENGINE,
    EXIT_AWS_CONFIGURATION,
    EXIT_CLUSTER_MEMBER_NOT_FOUND,
    EXIT_CREDENTIALS_FILE,
    EXIT_INTERFACE_ADDRESS,
    EXIT_MALFORMED_CLUSTER,
    EXIT_MALFORMED_INSTANCE,
    EXIT_METADATA_REGION,
    EXIT_METADATA_UNAVAILABLE,
    EXIT_METADATA_VPC,
    EXIT_UNKNOWN_ENGINE,
)
from typing import Optional


class RDSDiscoveryException(Exception):
    """Base exception for the RDS Datadog discovery tool.

    Every subclass carries the process exit code used when it reaches the entry point.
    """

    exit_code = 1


class CredentialsFileException(RDSDiscoveryException):
    """Exception raised when the credentials INI file can't be read or parsed."""

    exit_code = EXIT_CREDENTIALS_FILE

    def __init__(self, filename: str):
        """Initialize the CredentialsFileException.

        Args:
            filename: Path of the credentials file that failed to load
        """
        self.filename = filename
        super().__init__(ERROR_CREDENTIALS_FILE.format(filename))


class AWSConfigurationException(RDSDiscoveryException):
    """Exception raised when no usable AWS SDK configuration is available."""

    exit_code = EXIT_AWS_CONFIGURATION

    def __init__(self, reason: str):
        """Initialize the AWSConfigurationException.

        Args:
            reason: Description of the underlying SDK error
        """
        super().__init__(ERROR_AWS_CONFIGURATION.format(reason))


class DescribeFailedException(RDSDiscoveryException):
    """Exception raised when an RDS describe call fails."""

    def __init__(self, resource: str, reason: str, exit_code: int):
        """Initialize the DescribeFailedException.

        Args:
            resource: The kind of resource being described (e.g. 'DB instances')
            reason: Description of the underlying API error
            exit_code: Exit code for the failing call site
        """
        self.resource = resource
        self.exit_code = exit_code
        super().__init__(ERROR_DESCRIBE.format(resource, reason))


class MetadataUnavailableException(RDSDiscoveryException):
    """Exception raised when the EC2 metadata endpoint can't be reached."""

    exit_code = EXIT_METADATA_UNAVAILABLE

    def __init__(self):
        """Initialize the MetadataUnavailableException."""
        super().__init__(ERROR_METADATA_UNAVAILABLE)


class MetadataRegionException(RDSDiscoveryException):
    """Exception raised when the region can't be read from EC2 metadata."""

    exit_code = EXIT_METADATA_REGION

    def __init__(self, reason: str):
        """Initialize the MetadataRegionException."""
        super().__init__(ERROR_METADATA_REGION.format(reason))


class InterfaceAddressException(RDSDiscoveryException):
    """Exception raised when the MAC address of the local interface is unknown."""

    exit_code = EXIT_INTERFACE_ADDRESS

    def __init__(self, interface: str):
        """Initialize the InterfaceAddressException."""
        self.interface = interface
        super().__init__(ERROR_INTERFACE_ADDRESS.format(interface))


class MetadataVPCException(RDSDiscoveryException):
    """Exception raised when the VPC can't be read from EC2 metadata."""

    exit_code = EXIT_METADATA_VPC

    def __init__(self, reason: str):
        """Initialize the MetadataVPCException."""
        super().__init__(ERROR_METADATA_VPC.format(reason))


class MalformedResponseException(RDSDiscoveryException):
    """Exception raised when an RDS API item lacks a field the tool depends on."""

    def __init__(self, kind: str, identifier: Optional[str], field: str):
        """Initialize the MalformedResponseException.

        Args:
            kind: Either 'instance' or 'cluster'
            identifier: Identifier of the offending item, if it has one
            field: The missing field
        """
        self.identifier = identifier
        self.field = field
        if kind == 'cluster':
            self.exit_code = EXIT_MALFORMED_CLUSTER
            message = ERROR_MALFORMED_CLUSTER.format(identifier or 'unknown', field)
        else:
            self.exit_code = EXIT_MALFORMED_INSTANCE
            message = ERROR_MALFORMED_INSTANCE.format(identifier or 'unknown', field)
        super().__init__(message)


class UnknownEngineException(RDSDiscoveryException):
    """Exception raised for a database engine the tool doesn't know how to monitor."""

    def __init__(self, engine: Optional[str], exit_code: int = EXIT_UNKNOWN_ENGINE):
        """Initialize the UnknownEngineException.

        Args:
            engine: The engine name that was rejected
            exit_code: Exit code for the failing call site
        """
        self.engine = engine
        self.exit_code = exit_code
        super().__init__(ERROR_UNKNOWN_ENGINE.format(engine))


class ClusterMemberNotFoundException(RDSDiscoveryException):
    """Exception raised when an Aurora instance has no matching cluster membership.

    This means the instance and cluster describe calls disagree, so the writer/reader
    role can't be determined.
    """

    exit_code = EXIT_CLUSTER_MEMBER_NOT_FOUND

    def __init__(self, identifier: str):
        """Initialize the ClusterMemberNotFoundException."""
        self.identifier = identifier
        super().__init__(ERROR_CLUSTER_MEMBER_NOT_FOUND.format(identifier))
