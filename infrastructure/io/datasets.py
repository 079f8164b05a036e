"""Dataset loading utilities."""

from pathlib import Path

import pandas as pd


def read_table(path: Path) -> pd.DataFrame:
    """
    Read tabular data file (Excel, CSV or TSV) based on file extension.

    Supported formats:
    - Excel: .xlsx, .xls
    - CSV: .csv
    - TSV: .tsv, .tab

    Args:
        path: Path to data file

    Returns:
        pandas DataFrame

    Raises:
        ValueError: If file format is not supported
        FileNotFoundError: If file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in [".xlsx", ".xls"]:
        return pd.read_excel(path)
    elif suffix == ".csv":
        return pd.read_csv(path)
    elif suffix in [".tsv", ".tab"]:
        return pd.read_csv(path, sep="\t")
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .xlsx, .xls, .csv, .tsv")


def write_table(df: pd.DataFrame, path: Path) -> Path:
    """Write a DataFrame as CSV (parent directories are created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
