"""
Core package for uiquery.
Lightweight package init to avoid import cycles.

Consumers should import submodules directly, e.g.:
  from uiquery.core.query import build_query, Query
  from uiquery.core.classifier import evaluate
  from uiquery.core.diagnostics import render, QueryError
"""

__all__: list[str] = []
