import pathlib

import pandas as pd

# Columns that need renaming → target XdmField names
RENAME_MAP = {
    "measure_id": "id",
    "identifier": "id",
    "measure_value": "value",
    "amount": "value",
}

CSV_SUFFIXES = {".csv", ".tsv"}


def normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize headers to snake_case lowercase and apply renames from RENAME_MAP.
    """
    columns = (
        df.columns.astype(str)
        .str.strip()
        .str.replace(r"\s*\(.*?\)", "", regex=True)  # drop any "(…)"
        .str.replace(r"\s+", "_", regex=True)  # spaces → underscore
        .str.replace(":", "", regex=False)  # drop colons
        .str.lower()
    )
    df = df.set_axis(columns, axis=1)

    # apply specific renames (e.g. "measure_id" → "id"), never clobbering an existing column
    return df.rename(
        columns={
            orig: target
            for orig, target in RENAME_MAP.items()
            if orig in df.columns and target not in df.columns
        }
    )


def load_sheets_as_tables(workbook_path: str) -> dict[str, pd.DataFrame]:
    """
    Read each worksheet into a DataFrame:
      - first row = header
      - no index column; every column is data
      - normalize all headers to snake_case lowercase
      - apply renames from RENAME_MAP
    A CSV/TSV file is read as a single table named after the file stem.
    """
    path = pathlib.Path(workbook_path)
    if path.suffix.lower() in CSV_SUFFIXES:
        sep = "\t" if path.suffix.lower() == ".tsv" else ","
        df = pd.read_csv(path, sep=sep, header=0)
        return {path.stem: normalize_headers(df)}

    excel = pd.ExcelFile(workbook_path, engine="openpyxl")
    tables: dict[str, pd.DataFrame] = {}

    for sheet_name in excel.sheet_names:
        df = pd.read_excel(excel, sheet_name=sheet_name, header=0, engine="openpyxl")
        tables[sheet_name] = normalize_headers(df)

    return tables
