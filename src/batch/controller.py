"""
Batch controller - renders and exports one file per row.

Rows are processed strictly in input order with a short pause between them.
A row that fails validation, rendering or export is recorded and skipped;
nothing short of cancellation stops the batch early.
"""

import threading
import time
from collections.abc import Callable, Sequence

import structlog

from src.barcode.renderer import BarcodeRenderer
from src.barcode.validator import validate
from src.export.exporters import Exporter
from src.models.batch import BatchResult, BatchRow, BatchState, RowOutcome, RowStatus
from src.models.settings import ExportSettings, RenderSettings, Symbology

logger = structlog.get_logger(__name__)

DEFAULT_ROW_DELAY = 0.05


class BatchInProgressError(RuntimeError):
    """Raised when a batch is started while another one is running."""


class BatchController:
    """
    Drives one render + export cycle per batch row.

    State machine: idle -> running -> idle. Starting a run while one is in
    progress raises BatchInProgressError.
    """

    def __init__(
        self,
        renderer: BarcodeRenderer | None = None,
        row_delay: float = DEFAULT_ROW_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize controller.

        Args:
            renderer: Renderer to use (default: BarcodeRenderer())
            row_delay: Seconds to pause after each rendered row (0 disables)
            sleep: Sleep function, replaceable in tests
        """
        self.renderer = renderer or BarcodeRenderer()
        self.row_delay = row_delay
        self._sleep = sleep
        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._state = BatchState.IDLE

    @property
    def state(self) -> BatchState:
        return self._state

    def cancel(self) -> None:
        """Ask a running batch to stop before its next row."""
        if self._state is BatchState.RUNNING:
            logger.info("Batch cancellation requested")
            self._cancel.set()

    def run(
        self,
        rows: Sequence[BatchRow],
        render_settings: RenderSettings,
        export_settings: ExportSettings,
        exporter: Exporter,
        symbology: Symbology | None = None,
        on_row: Callable[[RowOutcome], None] | None = None,
    ) -> BatchResult:
        """
        Render and export every valid row.

        Args:
            rows: Rows in emission order
            render_settings: Rendering settings shared by all rows
            export_settings: Output format, resolution and filename parts
            exporter: Destination for rendered artifacts
            symbology: Symbology to use (default: render_settings.symbology)
            on_row: Called with each row's outcome as soon as it is known

        Returns:
            Per-row outcomes in input order

        Raises:
            BatchInProgressError: If another run is active
        """
        if not rows:
            logger.info("Batch has no rows, nothing to do")
            return BatchResult()

        if not self._lock.acquire(blocking=False):
            raise BatchInProgressError("A batch is already running")

        if symbology is not None and symbology != render_settings.symbology:
            render_settings = render_settings.model_copy(update={"symbology": symbology})

        result = BatchResult()
        self._cancel.clear()
        self._state = BatchState.RUNNING
        logger.info(
            "Starting batch",
            rows=len(rows),
            symbology=render_settings.symbology.value,
            format=export_settings.format.value,
        )

        try:
            for index, row in enumerate(rows):
                if self._cancel.is_set():
                    result.cancelled = True
                    logger.info("Batch cancelled", processed=index, remaining=len(rows) - index)
                    break

                outcome = self._process_row(index, row, render_settings, export_settings, exporter)
                result.outcomes.append(outcome)
                if on_row is not None:
                    on_row(outcome)

                if outcome.status is not RowStatus.SKIPPED and self.row_delay > 0:
                    self._sleep(self.row_delay)
        finally:
            self._state = BatchState.IDLE
            self._lock.release()

        logger.info(
            "Batch complete",
            exported=result.exported,
            skipped=result.skipped,
            failed=result.failed,
            cancelled=result.cancelled,
        )
        return result

    def _process_row(
        self,
        index: int,
        row: BatchRow,
        render_settings: RenderSettings,
        export_settings: ExportSettings,
        exporter: Exporter,
    ) -> RowOutcome:
        """Validate, render and export a single row."""
        outcome = validate(row.code, render_settings.symbology)
        if not outcome.admitted:
            logger.warning("Invalid barcode, skipping", index=index, code=row.code, reason=outcome.reason)
            return RowOutcome(index=index, code=row.code, status=RowStatus.SKIPPED, reason=outcome.reason)

        try:
            artifact = self.renderer.render_artifact(
                row.code,
                row.label,
                render_settings,
                export_settings,
            )
            filename = exporter.export(artifact)
        except Exception as e:
            logger.error("Failed to generate barcode", index=index, code=row.code, error=str(e))
            return RowOutcome(index=index, code=row.code, status=RowStatus.FAILED, reason=str(e))

        logger.debug("Exported barcode", index=index, code=row.code, filename=filename)
        return RowOutcome(index=index, code=row.code, status=RowStatus.EXPORTED, filename=filename)
