from __future__ import annotations

import logging

from .outcome import SequenceReport, StageOutcome
from .payload import WritePayload

logger = logging.getLogger(__name__)


class WriteSequencer:
    """Sends headers, body and styling to the summary tab, in that order.

    Every step is best effort: a failed step is logged and recorded in the
    returned report, and the following steps still run. Merge ranges in the
    styling step assume the header cells are already in place, so the order
    is fixed.
    """

    def __init__(self, client, enable_grid_styling: bool = False):
        self.client = client
        self.enable_grid_styling = enable_grid_styling

    def _steps(self, payload: WritePayload):
        steps = [
            ("headers", self.client.write_values, payload.header_payload),
            ("body", self.client.write_cells, payload.body_payload),
            ("header_styling", self.client.apply_styling, payload.style_payload),
        ]
        if self.enable_grid_styling:
            steps.append(("grid_styling", self.client.apply_styling, payload.grid_style_payload))
        return steps

    def run(self, payload: WritePayload, destination: str) -> SequenceReport:
        report = SequenceReport(destination=destination)
        for stage, send, part in self._steps(payload):
            if not part:
                logger.info("Nothing to send for %s on %s", stage, destination)
                report.outcomes.append(StageOutcome.success(stage, destination))
                continue
            try:
                send(list(part))
            except Exception as exc:
                logger.error("Summary step %s failed for %s: %s", stage, destination, exc)
                report.outcomes.append(StageOutcome.recoverable(stage, destination, exc))
                continue
            logger.info("Summary step %s written to %s", stage, destination)
            report.outcomes.append(StageOutcome.success(stage, destination))
        return report
