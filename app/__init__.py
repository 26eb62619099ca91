"""
BIM OData Service

Flattens per-model BIM metadata trees into a single queryable
Elements collection exposed through an OData-style HTTP interface.
"""

__version__ = "1.0.0"
