# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Leveled user-facing messages written to stderr"""

import logging
import os
import sys

PREFIXES = {
    logging.DEBUG: 'D: ',
    logging.INFO: 'I: ',
    logging.WARNING: 'W: ',
    logging.ERROR: 'E: ',
}

DEBUG_ENV_VAR = 'ROSA_DEBUG'

logger = logging.getLogger('rosactl.reporter')
logger.propagate = False


class _PrefixFormatter(logging.Formatter):
    def format(self, record):
        return PREFIXES.get(record.levelno, '') + record.getMessage()


def debug_from_env() -> bool:
    """Check whether debug output was requested through the environment."""
    return os.environ.get(DEBUG_ENV_VAR, '').lower() in ('1', 't', 'true', 'yes')


class Reporter:
    """Prints messages for the user, one prefix per level.

    Debug messages are only shown when debug is enabled. Messages use
    printf-style arguments, the same way as the logging module.

    All reporters share the 'rosactl.reporter' logger; creating one
    replaces the handler of the previous one.
    """

    def __init__(self, debug: bool = False, stream=None):
        self._debug = debug
        self._handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        self._handler.setFormatter(_PrefixFormatter())

        for old in list(logger.handlers):
            logger.removeHandler(old)
        logger.addHandler(self._handler)
        logger.setLevel(logging.DEBUG)

    @property
    def debug_enabled(self) -> bool:
        return self._debug

    def _emit(self, level, msg, args):
        if level == logging.DEBUG and not self._debug:
            return
        logger.log(level, msg, *args)

    def debugf(self, msg, *args):
        self._emit(logging.DEBUG, msg, args)

    def infof(self, msg, *args):
        self._emit(logging.INFO, msg, args)

    def warnf(self, msg, *args):
        self._emit(logging.WARNING, msg, args)

    def errorf(self, msg, *args):
        self._emit(logging.ERROR, msg, args)


def create_reporter(debug: bool = False, stream=None) -> Reporter:
    """Create the reporter used by a command

    Args:
        debug: Show debug messages
        stream: Output stream (default: stderr)

    Returns:
        Reporter instance
    """
    return Reporter(debug=debug or debug_from_env(), stream=stream)
