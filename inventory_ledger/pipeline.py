import logging
from abc import ABC, abstractmethod
from typing import Any

import pandas as pd

from .store import LedgerStore

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for ledger read pipelines (Report, Inventory summary).
    Follows an Extract -> Transform -> Load (ETL) pattern over a store.
    """

    def __init__(self, report_type: str, store: LedgerStore, save_outputs: bool = False):
        self.report_type = report_type
        self.store = store
        self.save_outputs = save_outputs

    def run(self) -> Any:
        """
        Orchestrates the pipeline execution and returns the transformed result.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()}")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data.empty:
            logger.warning(f"⚠️ No transactions matched for {self.report_type}.")

        # --- 2. TRANSFORM ---
        result = self.transform(raw_data)

        # --- 3. LOAD ---
        self.load(result)

        logger.info(f"✅ {self.report_type.capitalize()} finished.\n")
        logger.info("=" * 60)
        return result

    @abstractmethod
    def extract(self) -> pd.DataFrame:
        """Selects the transactions this pipeline works on, as a flat DataFrame."""

    @abstractmethod
    def transform(self, df: pd.DataFrame) -> Any:
        """Aggregates the extracted frame into the pipeline's result."""

    @abstractmethod
    def load(self, result: Any) -> None:
        """Logs the result and optionally writes it to disk."""
