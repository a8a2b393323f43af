# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Configuration file parsing (YAML, which also covers JSON)"""

import yaml


def load_yaml(filepath) -> dict:
    """Load a YAML or JSON mapping with UTF-8 encoding

    Args:
        filepath: Path to the file

    Returns:
        dict: Parsed data, empty for an empty file

    Raises:
        ValueError: If the document is not a mapping
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {filepath}, got {type(data).__name__}")
    return data
