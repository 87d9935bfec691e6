#!/usr/bin/env python3
"""Decision Explorer XML to normalized graph tables.

This module converts a Decision Explorer cognitive map export (``.mdx``
XML) into three tables: nodes (concepts with layout and style type),
edges (causal links with polarity) and node styles (colour and weight
per style name).
"""
import argparse
import json
import logging
import math
import sys

# Use defusedxml for secure XML parsing (prevents XXE attacks)
import defusedxml.ElementTree as ET

# Import Element type from standard library for type hints
from xml.etree.ElementTree import Element, ParseError
from pathlib import Path

import pandas as pd

from ....core.config import conversion_config
from ....core.logging import setup_logging
from ....models.models import DecisionExplorerModel

# Initialize logger for this module
logger = logging.getLogger(__name__)

NODE_COLUMNS = {
    "name": "string",
    "refno": "Int64",
    "label": "string",
    "type": "string",
    "id": "string",
    "x": "Float64",
    "y": "Float64",
    "description": "string",
    "tags": "string",
}

EDGE_COLUMNS = {
    "name": "string",
    "refno": "Int64",
    "polarity": "string",
    "from": "string",
    "to": "string",
    "id": "string",
    "curvature": "Float64",
    "description": "string",
    "weight": "Float64",
}

STYLE_COLUMNS = {
    "type": "string",
    "font_colour": "string",
    "font_weight": "string",
}


class DecisionExplorerParseError(ValueError):
    """Raised when a Decision Explorer document cannot be converted."""
    pass


def _as_int(value: str | None) -> int | None:
    return None if value is None else int(value)


def _as_float(value: str | None) -> float | None:
    return None if value is None else float(value)


def _standard_to_null(style: str | None) -> str | None:
    """Map the built-in "standard" style name to null."""
    return None if style == conversion_config.STANDARD_STYLE else style


def _frame(records: list[dict], columns: dict[str, str]) -> pd.DataFrame:
    """Build a DataFrame with a fixed column set and nullable dtypes."""
    frame = pd.DataFrame.from_records(records, columns=list(columns))
    try:
        return frame.astype(columns)
    except OverflowError as e:
        raise DecisionExplorerParseError(f"Identifier out of range: {e}") from e


def parse_document(xml_content: str | bytes) -> Element:
    """Parse Decision Explorer XML into an element tree root.

    Args:
        xml_content: XML document content

    Returns:
        Root element of the document

    Raises:
        DecisionExplorerParseError: If the document is not well-formed XML
    """
    try:
        return ET.fromstring(xml_content)
    except ParseError as e:
        raise DecisionExplorerParseError(str(e)) from e


def get_node_info(root: Element) -> pd.DataFrame:
    """
    Extract concepts and their layout positions.

    Every ``concept`` is kept; coordinates come from the first ``position``
    element referencing the concept, and are null when there is none.

    Args:
        root: Root element of the Decision Explorer document

    Returns:
        DataFrame with columns refno, label, type, x, y (coordinates unscaled)
    """
    concepts = [
        {
            "refno": _as_int(elem.get("id")),
            "label": "".join(elem.itertext()),
            "type": _standard_to_null(elem.get("style")),
        }
        for elem in root.iterfind(".//concept")
    ]

    positions: dict[int | None, dict[str, float | None]] = {}
    for elem in root.iterfind(".//position"):
        refno = _as_int(elem.get("concept"))
        x = _as_float(elem.get("x"))
        y = _as_float(elem.get("y"))
        if refno in positions:
            logger.debug(f"Ignoring duplicate position for concept {refno}")
            continue
        positions[refno] = {"x": x, "y": y}

    records = []
    for concept in concepts:
        layout = positions.get(concept["refno"], {"x": None, "y": None})
        records.append({**concept, **layout})

    return _frame(records, {k: NODE_COLUMNS[k] for k in ("refno", "label", "type", "x", "y")})


def get_edge_info(root: Element) -> pd.DataFrame:
    """Extract links in document order as raw from/to refno text and polarity."""
    records = [
        {
            "from": elem.get("linkfrom"),
            "to": elem.get("linkto"),
            "polarity": elem.get("sign"),
        }
        for elem in root.iterfind(".//link")
    ]
    return _frame(records, {"from": "string", "to": "string", "polarity": "string"})


def percent_to_hex(red: str | float | None, green: str | float | None, blue: str | float | None) -> str | None:
    """
    Convert percentage colour channels to a lowercase ``#rrggbb`` string.

    Each channel on a 0-100 scale is mapped to 0-255, rounding halves up
    (50 -> 128 -> ``80``).

    Args:
        red: Red channel percentage
        green: Green channel percentage
        blue: Blue channel percentage

    Returns:
        Hex colour string, or None if any channel is missing

    Raises:
        DecisionExplorerParseError: If a channel is outside 0-100
    """
    channels = (red, green, blue)
    if any(channel is None for channel in channels):
        return None

    digits = []
    for channel in channels:
        percent = float(channel)
        if not 0 <= percent <= 100:
            raise DecisionExplorerParseError(f"Colour percentage out of range [0, 100]: {channel}")
        digits.append(f"{math.floor(percent * 255 / 100 + 0.5):02x}")
    return "#" + "".join(digits)


def recode_bold(flag: str | None) -> str | None:
    """Recode the conceptstyle bold flag: "1" -> "bold", "0" or missing -> None."""
    if flag is None:
        return None
    key = flag.strip()
    if key not in conversion_config.BOLD_FONT_WEIGHTS:
        raise DecisionExplorerParseError(f"Unrecognized bold flag: {flag!r} (expected '0' or '1')")
    return conversion_config.BOLD_FONT_WEIGHTS[key]


def get_node_style_info(root: Element) -> pd.DataFrame:
    """Extract concept styles with derived font colour and weight."""
    records = [
        {
            "type": _standard_to_null(elem.get("name")),
            "font_colour": percent_to_hex(
                elem.get("redpercent"),
                elem.get("greenpercent"),
                elem.get("bluepercent"),
            ),
            "font_weight": recode_bold(elem.get("bold")),
        }
        for elem in root.iterfind(".//conceptstyle")
    ]
    return _frame(records, STYLE_COLUMNS)


def _prefixed(prefix: str, refnos: pd.Series) -> pd.Series:
    """Build string identifiers ``<prefix><refno>``; null refnos stay null."""
    return prefix + refnos.astype("string")


def assemble_nodes(raw_nodes: pd.DataFrame, scaling: float) -> pd.DataFrame:
    """Derive node identifiers, rescale coordinates and fix the column set.

    The y axis is negated: Decision Explorer puts the origin bottom-left,
    downstream layouts expect top-left.
    """
    nodes = raw_nodes.copy()
    nodes["name"] = _prefixed(conversion_config.NODE_NAME_PREFIX, nodes["refno"])
    nodes["id"] = _prefixed(conversion_config.NODE_ID_PREFIX, nodes["refno"])
    nodes["x"] = nodes["x"] / scaling
    nodes["y"] = -nodes["y"] / scaling
    nodes["description"] = pd.NA
    nodes["tags"] = pd.NA
    return nodes[list(NODE_COLUMNS)].astype(NODE_COLUMNS)


def assemble_edges(raw_edges: pd.DataFrame) -> pd.DataFrame:
    """Point edges at node names and assign 1-based positional refnos."""
    edges = raw_edges.copy()
    for column in ("from", "to"):
        edges[column] = _prefixed(conversion_config.NODE_NAME_PREFIX, edges[column])
    edges["refno"] = pd.array(list(range(1, len(edges) + 1)), dtype="Int64")
    edges["name"] = _prefixed(conversion_config.EDGE_NAME_PREFIX, edges["refno"])
    edges["id"] = _prefixed(conversion_config.EDGE_ID_PREFIX, edges["refno"])
    edges["curvature"] = pd.NA
    edges["description"] = pd.NA
    edges["weight"] = conversion_config.DEFAULT_EDGE_WEIGHT
    return edges[list(EDGE_COLUMNS)].astype(EDGE_COLUMNS)



def _check_scaling(scaling: float) -> float:
    scaling = float(scaling)
    if scaling == 0 or not math.isfinite(scaling):
        raise ValueError(f"scaling must be a finite non-zero number, got {scaling}")
    return scaling


def convert_decision_explorer_xml(
    xml_content: str | bytes, scaling: float = conversion_config.DEFAULT_SCALING
) -> DecisionExplorerModel:
    """Convert Decision Explorer XML content into normalized graph tables.

    Args:
        xml_content: Decision Explorer XML document content
        scaling: Factor to scale the coordinates down by

    Returns:
        DecisionExplorerModel with nodes, edges and node_styles tables

    Raises:
        DecisionExplorerParseError: If the XML is malformed or a style is invalid
        ValueError: If scaling is zero, or an identifier/coordinate is not numeric
    """
    scaling = _check_scaling(scaling)
    root = parse_document(xml_content)

    nodes = assemble_nodes(get_node_info(root), scaling)
    edges = assemble_edges(get_edge_info(root))
    node_styles = get_node_style_info(root)

    logger.info(
        f"Converted Decision Explorer model: {len(nodes)} nodes, "
        f"{len(edges)} edges, {len(node_styles)} styles"
    )
    return DecisionExplorerModel(nodes=nodes, edges=edges, node_styles=node_styles)


def import_from_decision_explorer_xml(
    filepath: str | Path, scaling: float = conversion_config.DEFAULT_SCALING
) -> DecisionExplorerModel:
    """Import a Decision Explorer XML file (e.g. ``example_network.mdx``).

    Args:
        filepath: Path of the Decision Explorer XML file
        scaling: Factor to scale the coordinates down by

    Returns:
        DecisionExplorerModel with nodes, edges and node_styles tables
    """
    path = Path(filepath)
    logger.info(f"Reading Decision Explorer model from {path}")
    return convert_decision_explorer_xml(path.read_bytes(), scaling=scaling)


def main(argv: list[str] | None = None) -> int:
    """Command-line interface: print converted tables as JSON records."""
    parser = argparse.ArgumentParser(
        prog="cogmap-import",
        description="Convert a Decision Explorer XML model into node, edge and style tables",
    )
    parser.add_argument("file", help="Path to the Decision Explorer .mdx/.xml file")
    parser.add_argument(
        "--scaling",
        type=float,
        default=conversion_config.DEFAULT_SCALING,
        help="Factor to scale the coordinates down by (default: %(default)s)",
    )
    parser.add_argument(
        "--table",
        choices=[*DecisionExplorerModel.SLOTS, "all"],
        default="all",
        help="Table to print (default: all)",
    )
    parser.add_argument("--summary", action="store_true", help="Print row counts instead of tables")
    args = parser.parse_args(argv)

    # Logs go to stderr so stdout carries only the JSON output
    setup_logging(stream="ext://sys.stderr")

    try:
        model = import_from_decision_explorer_xml(args.file, scaling=args.scaling)
    except (DecisionExplorerParseError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)  # noqa: T201
        return 1

    if args.summary:
        payload = model.summary(args.scaling, source=args.file).model_dump()
    else:
        records = model.to_records()
        payload = records if args.table == "all" else records[args.table]

    print(json.dumps(payload, indent=2, default=str))  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
