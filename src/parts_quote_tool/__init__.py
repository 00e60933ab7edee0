# src/parts_quote_tool/__init__.py
from .catalog import CatalogStore
from .models import (
    CatalogSourceError,
    DisplayRow,
    MissingRecordError,
    PriceOverride,
    QuoteSnapshot,
    QuoteToolError,
    SchemaError,
)
from .selection import PriceOverrideMap, SelectionSet
from .session import QuoteSession

__version__ = "0.1.0"
