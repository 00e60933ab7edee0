# src/parts_quote_tool/config.py
import os


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _list_env(name: str, default: str) -> tuple:
    raw = os.getenv(name) or default
    return tuple(c.strip() for c in raw.split(",") if c.strip())


# Where the product list comes from: a file path or an http(s) URL
CATALOG_SOURCE = os.getenv("QUOTE_CATALOG_SOURCE", "smc_products.csv")

SUGGESTION_LIMIT = _int_env("QUOTE_SUGGESTION_LIMIT", 10)
EXPORT_COLUMNS = _list_env("QUOTE_EXPORT_COLUMNS", "Part No,CUBIX LP,Quantity,Price")
SUMMARY_COLUMNS = _list_env("QUOTE_SUMMARY_COLUMNS", "Part No,SMC LP,CUBIX LP,Quantity,Price")
DEFAULT_EXPORT_NAME = os.getenv("QUOTE_DEFAULT_EXPORT_NAME", "quantities")
CURRENCY_SYMBOL = os.getenv("QUOTE_CURRENCY_SYMBOL", "$")
HTTP_TIMEOUT = _float_env("QUOTE_HTTP_TIMEOUT", 10.0)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
