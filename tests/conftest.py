import pytest

from parts_quote_tool.catalog import CatalogStore
from parts_quote_tool.session import QuoteSession

FIELDS = ["Part No", "SMC LP", "CUBIX LP", "Description"]


@pytest.fixture
def raw_rows():
    return [
        {"Part No": "P1", "SMC LP": "12.00", "CUBIX LP": "10.00", "Description": "Valve"},
        {"Part No": "P1", "SMC LP": "24.00", "CUBIX LP": "20.00", "Description": "Valve (dup)"},
        {"Part No": "P2", "SMC LP": "6.00", "CUBIX LP": "5.00", "Description": "Fitting, 1/4\""},
        {"Part No": "p10", "SMC LP": "", "CUBIX LP": "n/a", "Description": "Cylinder"},
    ]


@pytest.fixture
def catalog(raw_rows):
    return CatalogStore.load(raw_rows, FIELDS)


@pytest.fixture
def session(catalog):
    return QuoteSession(catalog, suggestion_limit=10)
