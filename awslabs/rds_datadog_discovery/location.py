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

"""Detection of the region and VPC to discover databases in."""

import psutil
import requests
from .constants import (
    METADATA_AVAILABILITY_PATH,
    METADATA_BASE_URL,
    METADATA_REGION_PATH,
    METADATA_TIMEOUT_SECONDS,
    METADATA_TOKEN_TTL_SECONDS,
    METADATA_VPC_PATH,
)
from .exceptions import (
    InterfaceAddressException,
    MetadataRegionException,
    MetadataUnavailableException,
    MetadataVPCException,
)
from loguru import logger
from pydantic import BaseModel, Field
from typing import Optional


class Location(BaseModel):
    """Where to look for databases."""

    region: str = Field(description='The AWS region to query')
    vpc_id: str = Field(description='Only databases in this VPC are monitored')


class EC2MetadataClient:
    """Minimal client for the EC2 instance metadata service.

    Requests are bounded by a short timeout and never retried, so that running outside of
    EC2 fails fast.
    """

    def __init__(
        self,
        base_url: str = METADATA_BASE_URL,
        timeout: float = METADATA_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Root of the metadata service
            timeout: Timeout in seconds for each request
            session: HTTP session to use, a new one when None
        """
        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._session = session or requests.Session()
        self._token: Optional[str] = None

    def _fetch_token(self) -> None:
        # IMDSv2; when the token endpoint refuses, fall back to IMDSv1 requests
        response = self._session.put(
            f'{self._base_url}/api/token',
            headers={'X-aws-ec2-metadata-token-ttl-seconds': str(METADATA_TOKEN_TTL_SECONDS)},
            timeout=self._timeout,
        )
        if response.ok:
            self._token = response.text

    def get_metadata(self, path: str) -> str:
        """Read one metadata value.

        Args:
            path: Path below the metadata root, e.g. 'meta-data/placement/region'

        Returns:
            str: The value

        Raises:
            requests.RequestException: If the request fails or returns an error status
        """
        headers = {}
        if self._token:
            headers['X-aws-ec2-metadata-token'] = self._token
        response = self._session.get(
            f'{self._base_url}/{path}', headers=headers, timeout=self._timeout
        )
        response.raise_for_status()
        return response.text.strip()

    def available(self) -> bool:
        """Check whether the metadata service answers."""
        try:
            self._fetch_token()
            self.get_metadata(METADATA_AVAILABILITY_PATH)
        except requests.RequestException as error:
            logger.debug(f'EC2 metadata service unavailable: {error}')
            return False
        return True

    def region(self) -> str:
        """Get the region of the current EC2 instance."""
        return self.get_metadata(METADATA_REGION_PATH)

    def vpc_id(self, mac: str) -> str:
        """Get the VPC of the network interface with the given MAC address."""
        return self.get_metadata(METADATA_VPC_PATH.format(mac=mac))


def get_interface_mac(interface: str) -> str:
    """Get the MAC address of a local network interface.

    Raises:
        InterfaceAddressException: If the interface doesn't exist or has no link address
    """
    for address in psutil.net_if_addrs().get(interface, []):
        if address.family == psutil.AF_LINK and address.address:
            return address.address.replace('-', ':').lower()
    raise InterfaceAddressException(interface)


def detect_location(interface: str, client: Optional[EC2MetadataClient] = None) -> Location:
    """Detect region and VPC from the EC2 metadata service.

    Args:
        interface: Local network interface whose VPC is used
        client: Metadata client, a default one when None

    Returns:
        Location: The detected location

    Raises:
        MetadataUnavailableException: If the metadata service can't be reached
        MetadataRegionException: If the region can't be read
        InterfaceAddressException: If the interface MAC address is unknown
        MetadataVPCException: If the VPC can't be read
    """
    client = client or EC2MetadataClient()
    if not client.available():
        raise MetadataUnavailableException()

    try:
        region = client.region()
    except requests.RequestException as error:
        raise MetadataRegionException(str(error)) from error
    logger.info(f'Detected EC2 metadata region: {region}')

    mac = get_interface_mac(interface)
    logger.info(f'{interface} MAC {mac}')

    try:
        vpc_id = client.vpc_id(mac)
    except requests.RequestException as error:
        raise MetadataVPCException(str(error)) from error
    logger.info(f'Detected VPC: {vpc_id}')

    return Location(region=region, vpc_id=vpc_id)


def resolve_location(
    use_metadata: bool,
    interface: str,
    region: str,
    vpc_id: str,
    client: Optional[EC2MetadataClient] = None,
) -> Location:
    """Resolve the location either from EC2 metadata or from operator supplied values.

    Args:
        use_metadata: Detect the location from EC2 metadata
        interface: Local network interface used for detection
        region: Region used when not detecting
        vpc_id: VPC used when not detecting
        client: Metadata client used for detection

    Returns:
        Location: The resolved location
    """
    if use_metadata:
        location = detect_location(interface, client)
    else:
        location = Location(region=region, vpc_id=vpc_id)
    logger.info(f'Region: {location.region}, VPC-ID: {location.vpc_id}')
    return location
