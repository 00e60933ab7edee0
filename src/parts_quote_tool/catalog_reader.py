# src/parts_quote_tool/catalog_reader.py
from __future__ import annotations

import io
import logging
import os
from typing import Any, Dict, List, Tuple

import pandas as pd
import requests

from . import config
from .catalog import CatalogStore
from .models import CatalogSourceError

log = logging.getLogger(__name__)

EXCEL_EXTENSIONS = [".xlsx", ".xlsm", ".xls"]
CSV_ENCODINGS = ["utf-8-sig", "cp1252", "latin1"]

# every column stays text; blanks stay "" instead of NaN
_READ_OPTS = dict(dtype=str, keep_default_na=False, skip_blank_lines=True)


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _fetch_text(url: str) -> str:
    try:
        response = requests.get(url, timeout=config.HTTP_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        log.error("Catalog download failed %s error=%s", url, e)
        raise CatalogSourceError(f"Could not download catalog from {url}: {e}") from e
    return response.text


def _read_file(path: str) -> pd.DataFrame:
    if not os.path.exists(path):
        raise CatalogSourceError(f"Catalog file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext in EXCEL_EXTENSIONS:
        return pd.read_excel(path, dtype=str, keep_default_na=False)

    # CSV: try common encodings
    for enc in CSV_ENCODINGS:
        try:
            return pd.read_csv(path, encoding=enc, **_READ_OPTS)
        except UnicodeDecodeError:
            continue
    return pd.read_csv(path, encoding="latin1", **_READ_OPTS)


def parse_catalog_text(text: str) -> pd.DataFrame:
    return pd.read_csv(io.StringIO(text), **_READ_OPTS)


def read_catalog(source: str) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Returns:
      - list of row dicts, in file order, values as strings
      - the column names, in file order
    """
    try:
        if _is_url(source):
            df = parse_catalog_text(_fetch_text(source))
        else:
            df = _read_file(source)
    except pd.errors.EmptyDataError as e:
        raise CatalogSourceError(f"Catalog {source} is empty") from e
    except pd.errors.ParserError as e:
        raise CatalogSourceError(f"Catalog {source} is not valid CSV: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    fields = list(df.columns)
    records = df.to_dict(orient="records")

    log.info("Read %d catalog rows from %s", len(records), source)
    return records, fields


def load_catalog(source: str | None = None) -> CatalogStore:
    records, fields = read_catalog(source or config.CATALOG_SOURCE)
    return CatalogStore.load(records, fields)
