#!/usr/bin/env python3
# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for table formatting and the reporter"""

import io
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from rosactl.utils.reporter import create_reporter
from rosactl.utils.table import format_table, print_table


def test_columns_are_aligned():
    table = format_table(
        ('ID', 'NAME', 'MULTI-AZ SUPPORT'),
        [('ap-northeast-1', 'Asia Pacific, Tokyo', 'true'), ('ca-central-1', 'Canada', 'false')],
    )

    lines = table.splitlines()
    assert lines[0] == 'ID' + ' ' * 16 + 'NAME' + ' ' * 19 + 'MULTI-AZ SUPPORT'
    assert lines[1] == 'ap-northeast-1    Asia Pacific, Tokyo    true'
    assert lines[2] == 'ca-central-1' + ' ' * 6 + 'Canada' + ' ' * 17 + 'false'
    assert table.endswith('\n')


def test_header_only():
    assert format_table(('ID', 'NAME', 'MULTI-AZ SUPPORT'), []) == 'ID    NAME    MULTI-AZ SUPPORT\n'


def test_print_table_writes_to_stream():
    out = io.StringIO()
    print_table(('A', 'B'), [('1', '2')], stream=out)
    assert out.getvalue() == 'A    B\n1    2\n'


def test_reporter_prefixes():
    err = io.StringIO()
    reporter = create_reporter(stream=err)

    reporter.infof("Using %s", 'us-east-1')
    reporter.warnf("careful")
    reporter.errorf("Failed: %s", 'boom')

    assert err.getvalue().splitlines() == ['I: Using us-east-1', 'W: careful', 'E: Failed: boom']


def test_reporter_debug_only_when_enabled(monkeypatch):
    monkeypatch.delenv('ROSA_DEBUG', raising=False)
    quiet, loud = io.StringIO(), io.StringIO()

    create_reporter(stream=quiet).debugf("Fetching regions")
    create_reporter(debug=True, stream=loud).debugf("Fetching regions")

    assert quiet.getvalue() == ''
    assert loud.getvalue() == 'D: Fetching regions\n'


def test_reporter_debug_from_env(monkeypatch):
    monkeypatch.setenv('ROSA_DEBUG', 'true')
    assert create_reporter(stream=io.StringIO()).debug_enabled


def test_header_wider_than_cells():
    """A wide header sets the column width without extra padding"""
    table = format_table(('ID', 'NAME', 'MULTI-AZ SUPPORT'), [('a', 'b', 'true')])
    assert table == 'ID    NAME    MULTI-AZ SUPPORT\na     b       true\n'


def test_cells_are_not_parsed_as_numbers():
    table = format_table(('ID', 'NAME'), [('1.50', 'x'), ('007', 'y')])
    assert table.splitlines() == ['ID      NAME', '1.50    x', '007     y']


def test_reporters_share_one_handler():
    from rosactl.utils.reporter import logger as reporter_logger

    first, second = io.StringIO(), io.StringIO()
    create_reporter(stream=first)
    reporter = create_reporter(stream=second)
    reporter.errorf("boom")

    assert len(reporter_logger.handlers) == 1
    assert first.getvalue() == ''
    assert second.getvalue() == 'E: boom\n'
