# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Logger shared by the OCM connection and the AWS client"""

import logging

LOGGER_NAME = 'rosactl'

# Libraries that are chatty at DEBUG level
QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3', 'httpcore', 'httpx')


def create_logger(reporter, debug: bool = False) -> logging.Logger:
    """Create the logger handed to the API clients

    Args:
        reporter: Reporter used by the command, its debug setting is honored
        debug: Enable debug logging

    Returns:
        logging.Logger: The 'rosactl' logger
    """
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    logger = logging.getLogger(LOGGER_NAME)
    if debug or reporter.debug_enabled:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
