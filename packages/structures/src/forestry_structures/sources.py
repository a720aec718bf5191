"""Flat record sources for tree builds.

Tabular query results usually arrive as pandas DataFrames; their missing
values are ``NaN``/``NaT`` rather than None, which would turn a root record
(no parent) into an orphan whose parent id is NaN.
"""

from typing import Any, Dict, List

import pandas as pd


def records_from_dataframe(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a DataFrame to one record dict per row, in row order.

    Missing values (``NaN``, ``NaT``, ``pd.NA``) become None, so an empty
    parent id cell reads as "no parent" and an empty weight cell as "no
    weight".

    Args:
        df: The table of records, one column per field.

    Returns:
        A list of dictionaries keyed by column name.
    """
    if df.empty:
        return []
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cleaned.to_dict(orient="records")
