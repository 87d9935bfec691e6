#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Any

import pandas as pd
from pydantic import BaseModel

# Pydantic Models


class ConversionSummary(BaseModel):
    """Row counts and layout coverage of a converted cognitive map."""

    node_count: int
    edge_count: int
    style_count: int
    positioned_node_count: int  # Nodes with x/y coordinates
    scaling: float
    source: str | None = None  # File the map was read from, if any


# Result container


@dataclass(frozen=True, eq=False)
class DecisionExplorerModel:
    """Normalized tables of a Decision Explorer cognitive map.

    ``nodes`` holds one row per concept, ``edges`` one row per link and
    ``node_styles`` one row per concept style. Also readable by slot name
    (``model["nodes"]``).
    """

    nodes: pd.DataFrame
    edges: pd.DataFrame
    node_styles: pd.DataFrame

    SLOTS = ("nodes", "edges", "node_styles")

    def __getitem__(self, key: str) -> pd.DataFrame:
        if key not in self.SLOTS:
            raise KeyError(key)
        return getattr(self, key)

    def keys(self) -> tuple[str, ...]:
        return self.SLOTS

    def as_dict(self) -> dict[str, pd.DataFrame]:
        return {slot: getattr(self, slot) for slot in self.SLOTS}

    def to_records(self) -> dict[str, list[dict[str, Any]]]:
        """Tables as lists of row dicts, nulls as None."""
        records = {}
        for slot, frame in self.as_dict().items():
            clean = frame.astype(object).where(frame.notna(), None)
            records[slot] = clean.to_dict(orient="records")
        return records

    def summary(self, scaling: float, source: str | None = None) -> ConversionSummary:
        positioned = int((self.nodes["x"].notna() & self.nodes["y"].notna()).sum())
        return ConversionSummary(
            node_count=len(self.nodes),
            edge_count=len(self.edges),
            style_count=len(self.node_styles),
            positioned_node_count=positioned,
            scaling=scaling,
            source=source,
        )
