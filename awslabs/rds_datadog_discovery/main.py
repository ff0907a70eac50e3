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

"""awslabs RDS Datadog discovery command line entry point."""

import argparse
import os
import sys
from awslabs.rds_datadog_discovery import __version__
from awslabs.rds_datadog_discovery.common.connection import RDSConnectionManager
from awslabs.rds_datadog_discovery.constants import (
    DEFAULT_INTERFACE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PASSWORDS_FILE,
    DEFAULT_REGION,
    DEFAULT_VPC_ID,
    LOG_LEVELS,
)
from awslabs.rds_datadog_discovery.credentials import CredentialsStore
from awslabs.rds_datadog_discovery.discovery import describe_db_clusters, describe_db_instances
from awslabs.rds_datadog_discovery.exceptions import RDSDiscoveryException
from awslabs.rds_datadog_discovery.location import resolve_location
from awslabs.rds_datadog_discovery.pipeline import build_datadog_config
from awslabs.rds_datadog_discovery.serializer import write_datadog_config
from loguru import logger


def parse_args(argv=None) -> argparse.Namespace:
    """Parse the command line."""
    parser = argparse.ArgumentParser(
        description='Discover RDS MySQL and Aurora databases in a VPC and print a Datadog '
        'MySQL check configuration for the ones listed in the credentials file'
    )
    parser.add_argument(
        '--passwords',
        default=DEFAULT_PASSWORDS_FILE,
        help='INI file where passwords are stored',
    )
    parser.add_argument(
        '--noec2metadata',
        action='store_true',
        help='Disable EC2 metadata for detecting region and VPC (useful for dev)',
    )
    parser.add_argument(
        '--ec2interface', default=DEFAULT_INTERFACE, help='Interface for detecting VPC'
    )
    parser.add_argument(
        '--region',
        default=DEFAULT_REGION,
        help='Default region (when not using EC2 metadata)',
    )
    parser.add_argument(
        '--vpcid',
        default=DEFAULT_VPC_ID,
        help='Default VPC ID for RDS discovery (when not using EC2 metadata)',
    )
    parser.add_argument('--profile', type=str, help='AWS profile to use for credentials')
    parser.add_argument(
        '--skip-invalid',
        action='store_true',
        help='Skip DB instances with an unsupported engine or incomplete description '
        'instead of failing',
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get('RDS_DISCOVERY_LOG_LEVEL', DEFAULT_LOG_LEVEL),
        help='Log level for messages written to stderr',
    )
    args = parser.parse_args(argv)
    # choices aren't checked against the default
    if args.log_level not in LOG_LEVELS:
        parser.error(f'invalid log level: {args.log_level!r}')
    return args


def run(args: argparse.Namespace) -> None:
    """Run one discovery pass and write the configuration to stdout.

    Raises:
        RDSDiscoveryException: On any fatal error
    """
    credentials = CredentialsStore.from_file(args.passwords)

    location = resolve_location(
        use_metadata=not args.noec2metadata,
        interface=args.ec2interface,
        region=args.region,
        vpc_id=args.vpcid,
    )

    RDSConnectionManager.initialize(region=location.region, profile=args.profile)
    try:
        rds_client = RDSConnectionManager.get_connection()
        clusters = describe_db_clusters(rds_client)
        instances = describe_db_instances(rds_client)
    finally:
        RDSConnectionManager.close_connection()

    config = build_datadog_config(
        instances,
        clusters,
        location.vpc_id,
        credentials,
        skip_invalid=args.skip_invalid,
    )
    write_datadog_config(config, sys.stdout)


def main(argv=None) -> None:
    """Run the discovery tool with CLI argument support."""
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    logger.info(f'Starting RDS Datadog discovery v{__version__}')
    try:
        run(args)
    except RDSDiscoveryException as error:
        logger.error(str(error))
        sys.exit(error.exit_code)


if __name__ == '__main__':
    main()
