import pandas as pd
import pytest


@pytest.fixture
def save_for_laters_workbook(tmp_path) -> str:
    """
    A small workbook with a `wishlist` sheet (alias of save_for_laters) and an unrelated sheet.
    Headers use the human-readable forms the loader is expected to normalize.
    """
    measures = pd.DataFrame({
        "Measure ID": ["abc123", "measure-12345", None],
        "Measure Value (units)": [9.99, 42.5, 3.0],
    })
    notes = pd.DataFrame({"note": ["ignored"]})
    path = tmp_path / "measures.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as w:
        measures.to_excel(w, sheet_name="wishlist", index=False)
        notes.to_excel(w, sheet_name="notes", index=False)
    return str(path)
