"""
Decision Explorer Conversion Domain

Handles conversion of Decision Explorer XML models to node, edge and
node style tables.
"""

from .converter import (
    DecisionExplorerParseError,
    convert_decision_explorer_xml,
    import_from_decision_explorer_xml,
)

__all__ = [
    "DecisionExplorerParseError",
    "convert_decision_explorer_xml",
    "import_from_decision_explorer_xml",
]
