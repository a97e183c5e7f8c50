"""
Entity conversion for the Structures CLI.

Turns locally declared entity classes into IDL entity definitions that can be
published to the Structures server.
"""

from .entity_converter_service import EntityConversionResult, EntityConverterService

__all__ = [
    "EntityConversionResult",
    "EntityConverterService",
]
