# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""'list regions' command: regions available for the current AWS account"""

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional

from rosactl.aws.client import ADMIN_USER_NAME, DEFAULT_REGION, AWSClientError
from rosactl.aws.client import new_client as new_aws_client
from rosactl.ocm.clusters_mgmt import CCS, AWSCredentials, CloudRegion, OCMError
from rosactl.ocm.connection import OCMConnectionError, new_connection
from rosactl.utils.log import create_logger
from rosactl.utils.reporter import create_reporter
from rosactl.utils.table import print_table

HEADERS = ('ID', 'NAME', 'MULTI-AZ SUPPORT')

EXAMPLE = """\
  # List all available regions
  rosactl list regions

  # List regions with support for multiple availability zones
  rosactl list regions --multi-az"""

TRUE_VALUES = ('1', 't', 'true', 'y', 'yes')
FALSE_VALUES = ('0', 'f', 'false', 'n', 'no')


@dataclass(frozen=True)
class RegionsArgs:
    """Parsed arguments of the command

    multi_az is None when --multi-az wasn't given, so no filtering happens.
    """
    multi_az: Optional[bool] = None
    debug: bool = False

    @classmethod
    def from_namespace(cls, ns: argparse.Namespace) -> 'RegionsArgs':
        return cls(multi_az=ns.multi_az, debug=getattr(ns, 'debug', False))


def parse_bool(value: str) -> bool:
    """Parse a flag value such as 'true', 'False' or '0'"""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value '{value}'")


def add_parser(subparsers) -> argparse.ArgumentParser:
    """Register the command under a 'list' subparsers object"""
    parser = subparsers.add_parser(
        'regions',
        aliases=['region'],
        help='List available regions',
        description='List regions that are available for the current AWS account.',
        epilog=f"examples:\n{EXAMPLE}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--multi-az',
        nargs='?',
        const=True,
        default=None,
        type=parse_bool,
        metavar='BOOL',
        help='List only regions with support for multiple availability zones',
    )
    parser.set_defaults(func=cmd_list_regions)
    return parser


def filter_regions(regions: Iterable[CloudRegion], multi_az: Optional[bool] = None) -> List[CloudRegion]:
    """Keep enabled regions, and when multi_az is set, only those matching it

    Args:
        regions: Regions in API order
        multi_az: Required multi-AZ support, or None for no filtering

    Returns:
        List of regions in the original order
    """
    selected = []
    for region in regions:
        if not region.enabled:
            continue
        if multi_az is not None and region.supports_multi_az != multi_az:
            continue
        selected.append(region)
    return selected


def region_rows(regions: Iterable[CloudRegion]) -> List[tuple]:
    """Table rows; booleans printed as 'true'/'false'"""
    return [
        (region.id, region.display_name, str(region.supports_multi_az).lower())
        for region in regions
    ]


def run(args: RegionsArgs, stdout=None, stderr=None):
    """List the regions available for the current AWS account

    Exits with status 1 if any step fails or no regions are available.
    """
    reporter = create_reporter(debug=args.debug, stream=stderr)
    logger = create_logger(reporter, debug=args.debug)

    # Create the client for the OCM API:
    try:
        connection = new_connection().logger(logger).build()
    except OCMConnectionError as e:
        reporter.errorf("Failed to create OCM connection: %s", e)
        sys.exit(1)

    try:
        ocm_client = connection.clusters_mgmt()

        try:
            aws_client = new_aws_client().logger(logger).region(DEFAULT_REGION).build()
        except AWSClientError as e:
            reporter.errorf("Failed to create AWS client: %s", e)
            sys.exit(1)

        try:
            access_key = aws_client.get_aws_access_keys()
        except AWSClientError as e:
            reporter.errorf("Failed to get access keys for user '%s': %s", ADMIN_USER_NAME, e)
            sys.exit(1)

        reporter.debugf("Fetching regions")
        ccs = CCS(
            enabled=True,
            aws=AWSCredentials(
                access_key_id=access_key.access_key_id,
                secret_access_key=access_key.secret_access_key,
            ),
        )
        try:
            regions = ocm_client.get_regions('aws', ccs)
        except OCMError as e:
            reporter.errorf("Failed to fetch regions: %s", e)
            sys.exit(1)

        if not regions:
            reporter.warnf("There are no regions available for this AWS account")
            sys.exit(1)

        print_table(HEADERS, region_rows(filter_regions(regions, args.multi_az)), stream=stdout)
    finally:
        try:
            connection.close()
        except Exception as e:
            reporter.errorf("Failed to close OCM connection: %s", e)


def cmd_list_regions(ns: argparse.Namespace):
    """Entry point used by the argument parser"""
    run(RegionsArgs.from_namespace(ns))
