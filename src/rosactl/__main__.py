# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Unified CLI entry point for rosactl."""

import sys
import logging
import traceback
import argparse

from rosactl import __version__
from rosactl.cli import regions

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='rosactl',
        description='Command line tool for Red Hat OpenShift Service on AWS'
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode')
    subparsers = parser.add_subparsers(dest='command')

    # list
    p_list = subparsers.add_parser('list', help='List all resources of a specific type')
    list_sub = p_list.add_subparsers(dest='list_command')

    # list regions
    regions.add_parser(list_sub)

    return parser, p_list


def main(argv=None):
    parser, p_list = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'list' and not getattr(args, 'list_command', None):
        p_list.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except KeyboardInterrupt:
        logger.info("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
