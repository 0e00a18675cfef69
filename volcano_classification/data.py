"""
Load the volcano table and derive the three-class volcano type label.
"""
import logging

import numpy as np
import pandas as pd

from volcano_classification import config
from volcano_classification.errors import DataUnavailable, SchemaMismatch

logger = logging.getLogger(__name__)


def load_volcanoes(source=config.DATA_URL):
    """
    Read the raw volcano CSV in a single attempt.

    source: URL or local path of the CSV file
    """
    logger.info("Loading volcano data from %s", source)
    try:
        raw = pd.read_csv(source)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataUnavailable(f"could not load volcano data from {source}: {e}") from e
    logger.info("Data loaded. Shape: %s", raw.shape)
    return raw


def classify_volcano_type(primary_type):
    """
    Map free-text volcano types onto Stratovolcano / Shield / Other.

    A type containing both substrings is a Stratovolcano; missing text is Other.
    """
    primary_type = pd.Series(primary_type).astype('string')
    conditions = [primary_type.str.contains(label, regex=False, na=False).to_numpy(dtype=bool)
                  for label in config.VOLCANO_TYPES[:-1]]
    labels = np.select(conditions, config.VOLCANO_TYPES[:-1],
                       default=config.VOLCANO_TYPES[-1])
    return pd.Series(labels, index=primary_type.index, name=config.TARGET)


def _check_schema(raw):
    required = list(config.RAW_COLUMNS) + [config.RAW_TYPE_COL]
    missing = [col for col in required if col not in raw.columns]
    if missing:
        raise SchemaMismatch(f"volcano data is missing columns: {missing}")

    numeric_raw = [raw_col for raw_col, col in config.RAW_COLUMNS.items()
                   if col in config.NUMERIC_COLS]
    mistyped = [col for col in numeric_raw
                if not pd.api.types.is_numeric_dtype(raw[col])]
    if mistyped:
        raise SchemaMismatch(f"expected numeric columns, got non-numeric: {mistyped}")


def derive_labels(raw):
    """
    Build the modeling table: volcano_type plus the six modeling columns.

    raw: dataframe as returned by load_volcanoes
    """
    _check_schema(raw)
    df = raw[list(config.RAW_COLUMNS)].rename(columns=config.RAW_COLUMNS)
    df[config.TARGET] = classify_volcano_type(raw[config.RAW_TYPE_COL]).values
    df[config.CATEGORICAL_COLS] = df[config.CATEGORICAL_COLS].astype(object)
    df = df[config.MODEL_COLS].reset_index(drop=True)
    logger.info("Volcano type counts: %s", df[config.TARGET].value_counts().to_dict())
    return df
