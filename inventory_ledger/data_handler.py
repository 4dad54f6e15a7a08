import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from . import reports, settings, utils
from .schemas import ItemStock, Report

logger = logging.getLogger(__name__)

PLACEHOLDER_FORMATS = ("pdf", "excel")


def _dated_path(base: str, suffix: str) -> Path:
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    return settings.OUTPUT_DIR / f"{base}_{utils.get_date_suffix_for_filename()}.{suffix}"


def write_report_csv(report: Report) -> Path:
    """Writes the report's transaction listing, with friendly column headers."""
    csv_path = _dated_path(settings.REPORT_FILENAME_BASE, "csv")
    df_for_csv = reports.transactions_to_frame(report.transactions).rename(
        columns=reports.CSV_COLUMNS
    )
    df_for_csv.to_csv(csv_path, index=False)
    logger.info(f"✅ Report listing saved to: {csv_path}")
    return csv_path


def write_report_json(report: Report) -> Path:
    """Writes the whole report, dumped by alias."""
    json_path = _dated_path(settings.REPORT_FILENAME_BASE, "json")
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(report.model_dump(mode="json", by_alias=True), f, indent=2)
    logger.info(f"✅ JSON output saved to: {json_path}")
    return json_path


def save_outputs(report: Report) -> dict[str, Path]:
    """Saves the report listing to CSV and conditionally the full report to JSON, with dated filenames."""
    saved = {"csv": write_report_csv(report)}

    if settings.SAVE_JSON_OUTPUT:
        saved["json"] = write_report_json(report)
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return saved


def save_inventory_summary(summary: list[ItemStock]) -> Path:
    """Writes the per-item stock status table to a dated CSV."""
    csv_path = _dated_path(settings.SUMMARY_FILENAME_BASE, "csv")

    columns = {
        field: info.alias or field for field, info in ItemStock.model_fields.items()
    }
    df = pd.DataFrame(
        [row.model_dump(mode="json") for row in summary], columns=list(columns)
    ).rename(columns=columns)
    df.to_csv(csv_path, index=False)
    logger.info(f"✅ Inventory summary saved to: {csv_path}")
    return csv_path


# Each export format writes exactly one file, whatever SAVE_JSON_OUTPUT says.
EXPORT_WRITERS = {
    "csv": write_report_csv,
    "json": write_report_json,
}


def export_report(report: Report, fmt: str) -> Optional[Path]:
    """
    Exports a report in one format. 'csv' writes the listing, 'json' the full
    report; 'pdf' and 'excel' are placeholders that only log a notice and
    return None.
    """
    fmt = fmt.lower()
    if fmt in PLACEHOLDER_FORMATS:
        logger.info(
            f"INFO: {fmt.upper()} export is not available in this demo. "
            "Use 'csv' or 'json' to write the report to disk."
        )
        return None

    writer = EXPORT_WRITERS.get(fmt)
    if writer is None:
        raise ValueError(f"Unsupported export format: {fmt}")

    return writer(report)
