# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Path resolution for the OCM configuration file using platformdirs."""

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "ocm"
ENV_VAR = "OCM_CONFIG"
LEGACY_FILENAME = ".ocm.json"
CONFIG_FILENAME = "ocm.json"


def get_legacy_config_path() -> Path:
    """Get the config file location used by older clients (~/.ocm.json)."""
    return Path.home() / LEGACY_FILENAME


def get_user_config_dir() -> Path:
    """Get the platform config directory for OCM."""
    return Path(user_config_dir(APP_NAME))


def get_config_path() -> Path:
    """Get path of the OCM configuration file.

    Priority: env var → ~/.ocm.json (if present) → platformdirs
    """
    if custom := os.environ.get(ENV_VAR):
        return Path(custom).expanduser()

    legacy = get_legacy_config_path()
    if legacy.exists():
        return legacy

    return get_user_config_dir() / CONFIG_FILENAME
