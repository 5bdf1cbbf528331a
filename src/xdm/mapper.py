import abc
import logging
import math
import typing

import pandas as pd

from stairval.notepad import Notepad

from .save_for_laters import SaveForLaters

logger = logging.getLogger(__name__)

# Minimal required columns (after renaming) to map a SaveForLaters sheet
SAVE_FOR_LATERS_KEY_COLUMNS = {"value"}
SAVE_FOR_LATERS_OPTIONAL_COLUMNS = {"id"}

# Friendly aliases → reduces friction while keeping behavior explicit
KNOWN_SHEET_ALIASES: dict[str, set[str]] = {
    "save_for_laters": {"saveforlaters", "save_for_laters", "save for laters", "wishlist", "wish_list", "wish list"},
}


class TableMapper(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def apply_mapping(
            self, tables: dict[str, pd.DataFrame], notepad: Notepad
    ) -> typing.Sequence[SaveForLaters]:
        # return fully-populated schema nodes, ready for serialize_to_xdm()
        raise NotImplementedError


class SaveForLatersMapper(TableMapper):
    def apply_mapping(
            self, tables: dict[str, pd.DataFrame], notepad: Notepad
    ) -> list[SaveForLaters]:
        """
        Process:
        1) choose the SaveForLaters table (alias, or the only table provided)
        2) check required columns
        3) map each row to a SaveForLaters measure
        """
        sheet_name, df = self._choose_table(tables, notepad)
        if df is None:
            return []
        return self._map_save_for_laters(sheet_name, df, notepad)

    def _choose_table(
            self, tables: dict[str, pd.DataFrame], notepad: Notepad
    ) -> tuple[str, pd.DataFrame | None]:
        """
        Prefer explicit sheet names (plus common aliases); a single unnamed sheet is accepted as-is.
        """
        aliases = KNOWN_SHEET_ALIASES["save_for_laters"]
        for sheet_name, df in tables.items():
            if sheet_name.strip().casefold() in aliases:
                return sheet_name, df

        if len(tables) == 1:
            sheet_name, df = next(iter(tables.items()))
            logger.debug("Using single sheet %r as SaveForLaters table", sheet_name)
            return sheet_name, df

        notepad.add_error(
            "Missing required sheet: 'save_for_laters' "
            f"(or one of {sorted(aliases)}); found {sorted(tables)}."
        )
        return "", None

    def _map_save_for_laters(self, sheet_name: str, df: pd.DataFrame, notepad: Notepad) -> list[SaveForLaters]:
        """
        Map each row in a SaveForLaters sheet to a SaveForLaters measure.
        Required column: value.
        Optional column: id (blank cells leave the id unset).
        """
        records: list[SaveForLaters] = []
        missing = SAVE_FOR_LATERS_KEY_COLUMNS - set(df.columns)
        if missing:
            notepad.add_error(f"Sheet {sheet_name!r}: missing required columns: {sorted(missing)}")
            return records

        duplicated = sorted(
            set(df.columns[df.columns.duplicated()]) & (SAVE_FOR_LATERS_KEY_COLUMNS | SAVE_FOR_LATERS_OPTIONAL_COLUMNS)
        )
        if duplicated:
            notepad.add_error(f"Sheet {sheet_name!r}: duplicate columns after header normalization: {duplicated}")
            return records

        for index, row in df.iterrows():
            raw_value = row["value"]
            if self._is_blank(raw_value):
                notepad.add_warning(f"Sheet {sheet_name!r}, row {index}: empty 'value', using 0.0")
                value = 0.0
            else:
                try:
                    value = float(raw_value)
                except (ValueError, TypeError) as exception:
                    notepad.add_error(f"Sheet {sheet_name!r}, row {index}: {exception}")
                    continue
                if not math.isfinite(value):
                    notepad.add_error(f"Sheet {sheet_name!r}, row {index}: non-finite 'value' {raw_value!r}")
                    continue

            measure = SaveForLaters()
            measure.set_id(self._normalize_id(row.get("id")))
            measure.set_value(value)
            records.append(measure)

        logger.debug("Sheet %r: mapped %d SaveForLaters rows", sheet_name, len(records))
        return records

    @staticmethod
    def _is_blank(value: typing.Any) -> bool:
        # None, NaN, NaT, pandas NA, and empty/whitespace-only strings
        return value is None or pd.isna(value) or (isinstance(value, str) and not value.strip())

    @staticmethod
    def _normalize_id(value: typing.Any) -> typing.Optional[str]:
        """
        Measure identifiers:
        - empty/NaN -> None (id stays unset)
        - integral floats read from numeric columns lose the '.0' (12345.0 -> '12345')
        - everything else is stringified and trimmed
        """
        if SaveForLatersMapper._is_blank(value):
            return None
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()
