# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Column-aligned tables for terminal output"""

import sys
from typing import List, Sequence

from tabulate import tabulate


def _with_spacers(cells: Sequence[str]) -> List[str]:
    # An empty column between data columns, like double tabs in a tab writer
    spaced = []
    for i, cell in enumerate(cells):
        if i:
            spaced.append('')
        spaced.append(cell)
    return spaced


def format_table(headers: Sequence[str], rows: List[Sequence[str]]) -> str:
    """Align cells into columns

    Every column except the last is padded to its widest cell plus four
    spaces. The header row goes through tabulate as a plain row so that no
    extra header padding is added.

    Args:
        headers: Header cells
        rows: Row cells, same length as headers

    Returns:
        str: Table text, one line per row, newline terminated
    """
    table = [_with_spacers(headers)] + [_with_spacers(row) for row in rows]
    text = tabulate(table, tablefmt='plain', disable_numparse=True)
    return ''.join(line.rstrip() + '\n' for line in text.splitlines())


def print_table(headers: Sequence[str], rows: List[Sequence[str]], stream=None):
    """Write a table and flush the stream (default: stdout)"""
    stream = stream if stream is not None else sys.stdout
    stream.write(format_table(headers, rows))
    stream.flush()
