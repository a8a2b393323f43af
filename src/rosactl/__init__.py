# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""rosactl - Command line tool for Red Hat OpenShift Service on AWS"""

from importlib.metadata import version

__version__ = version("rosactl")
__all__ = ["__version__"]
