"""
Extractor module: dialect selection and parser orchestration.
"""

from schema_extractor.extractor.schema_extractor import SchemaExtractor, parse

__all__ = ["SchemaExtractor", "parse"]
