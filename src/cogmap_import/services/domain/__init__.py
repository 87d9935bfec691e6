"""
Domain Layer

This package contains conversion logic organized by source format.

Domains:
- decision_explorer: Decision Explorer XML to node/edge/style tables
"""
