from __future__ import annotations

import logging

from .errors import ProvisioningError
from .outcome import StageOutcome
from .planner import DimensionPlan

logger = logging.getLogger(__name__)

STAGE = "provision"


class TabProvisioner:
    """Grows the destination tab to the planned size.

    Any failure, from a missing tab to a dropped connection, comes back as a fatal outcome whose
    error is a :class:`ProvisioningError`; the pipeline raises it and writes
    nothing.
    """

    def __init__(self, client):
        self.client = client

    def provision(self, destination_title: str, plan: DimensionPlan) -> StageOutcome:
        try:
            tab_id = self.client.resolve_tab_id(destination_title)
            self.client.resize_tab(tab_id, plan.columns, plan.rows)
        except Exception as exc:
            logger.error("Error in adding columns and rows to %s: %s", destination_title, exc)
            error = ProvisioningError(destination_title, str(exc))
            error.__cause__ = exc
            return StageOutcome.fatal(STAGE, destination_title, error)
        logger.info(
            "Provisioned %s (sheetId=%s) to %s columns x %s rows",
            destination_title,
            tab_id,
            plan.columns,
            plan.rows,
        )
        return StageOutcome.success(STAGE, destination_title)
