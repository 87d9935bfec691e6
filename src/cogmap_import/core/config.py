#!/usr/bin/env python3
"""
Configuration defaults for Decision Explorer conversion.

The conversion reads no environment variables; these values are the fixed
conventions of the normalized node/edge/style tables.
"""

import logging

logger = logging.getLogger(__name__)


class ConversionConfig:
    """Conversion defaults and identifier conventions.

    Identifier prefixes determine the derived ``name``/``id`` columns:
    nodes become ``elem-<refno>`` / ``node-<refno>`` and edges become
    ``conn-<refno>`` / ``edge-<refno>``.
    """

    # Decision Explorer coordinates are large; divide both axes by this
    DEFAULT_SCALING = 5.0

    # Style name Decision Explorer gives to unstyled concepts (mapped to null)
    STANDARD_STYLE = "standard"

    NODE_NAME_PREFIX = "elem-"
    NODE_ID_PREFIX = "node-"
    EDGE_NAME_PREFIX = "conn-"
    EDGE_ID_PREFIX = "edge-"

    DEFAULT_EDGE_WEIGHT = 1.0

    # Recoding of the conceptstyle "bold" flag
    BOLD_FONT_WEIGHTS = {"1": "bold", "0": None}


# Singleton instance
conversion_config = ConversionConfig()
