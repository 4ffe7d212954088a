"""Core model generation for model-gen

This package introspects database tables and renders C# model classes.
"""

from core.generator import generate_models, generate_table_model
from core.models import ColumnDescriptor, ConnectionContext, GenerationSummary, TableDescriptor, TableResult

__all__ = [
    "ColumnDescriptor",
    "ConnectionContext",
    "GenerationSummary",
    "TableDescriptor",
    "TableResult",
    "generate_models",
    "generate_table_model",
]
