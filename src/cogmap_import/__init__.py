"""Convert Decision Explorer cognitive maps into normalized graph tables."""
from .models.models import ConversionSummary, DecisionExplorerModel
from .services.domain.decision_explorer import (
    DecisionExplorerParseError,
    convert_decision_explorer_xml,
    import_from_decision_explorer_xml,
)

__all__ = [
    "ConversionSummary",
    "DecisionExplorerModel",
    "DecisionExplorerParseError",
    "convert_decision_explorer_xml",
    "import_from_decision_explorer_xml",
]
