"""
Type dictionaries and keyword tables.

This package contains the TypeMapProvider interface, its dictionary-backed
implementation, the default Drizzle and Prisma type tables, and the keyword
tables each structural parser recognizes.
"""

from schema_extractor.typemap.defaults import DRIZZLE_TYPE_MAPPING, PRISMA_TYPE_MAPPING
from schema_extractor.typemap.dict_provider import DictTypeMapProvider
from schema_extractor.typemap.keywords import DrizzleKeywords, PrismaKeywords
from schema_extractor.typemap.provider import TypeMapProvider

__all__ = [
    "DRIZZLE_TYPE_MAPPING",
    "PRISMA_TYPE_MAPPING",
    "DictTypeMapProvider",
    "DrizzleKeywords",
    "PrismaKeywords",
    "TypeMapProvider",
]
