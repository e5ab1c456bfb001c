from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from .config import Settings, load_settings
from .errors import ProvisioningError, TabNotFoundError
from .outcome import SequenceReport, StageStatus
from .payload import PayloadBuilder
from .periods import new_destination_title, select_prior_period_titles, today_in
from .planner import plan_dimensions
from .provisioner import TabProvisioner
from .sequencer import WriteSequencer
from .sheets import SheetsClient

logger = logging.getLogger(__name__)


class SummaryPipeline:
    """Builds last month's summary tab.

    Tab creation, planning and provisioning failures propagate and stop the
    run before anything is written. Write failures are logged by the
    sequencer and the run still completes.
    """

    def __init__(
        self,
        client,
        settings: Settings,
        payload_builder=None,
        today: Callable[[], date] | None = None,
    ):
        self.client = client
        self.settings = settings
        self.payload_builder = payload_builder or PayloadBuilder(client, settings.header_indicators)
        self.today = today or (lambda: today_in(settings.timezone))
        self.provisioner = TabProvisioner(client)
        self.sequencer = WriteSequencer(client, enable_grid_styling=settings.enable_grid_styling)
        self.last_report: SequenceReport | None = None

    def run(self) -> None:
        today = self.today()
        existing = self.client.list_existing_titles(self.settings.tab_range)
        prior_titles = select_prior_period_titles(existing, today, self.settings.ignore_sheets)
        logger.info("Found %s prior-period tabs: %s", len(prior_titles), ", ".join(prior_titles))

        destination = new_destination_title(today, self.settings.title_template)
        destination_id = self.client.create_tab(destination)
        logger.info("Created summary tab %s (sheetId=%s)", destination, destination_id)

        try:
            payload = self.payload_builder.build(prior_titles, destination, destination_id)
        except TabNotFoundError as exc:
            if exc.title != destination:
                raise
            raise ProvisioningError(destination, str(exc)) from exc
        plan = plan_dimensions(prior_titles, self.settings.header_indicators, payload.body_payload)
        logger.info("Planned %s columns x %s rows for %s", plan.columns, plan.rows, destination)

        outcome = self.provisioner.provision(destination, plan)
        if outcome.status is StageStatus.FATAL:
            raise outcome.error

        self.last_report = self.sequencer.run(payload, destination)
        logger.info("Summary %s finished: %s", destination, self.last_report.summary())


def run_summary_pipeline(settings: Settings | None = None, client=None) -> None:
    settings = settings or load_settings()
    client = client or SheetsClient.from_settings(settings)
    SummaryPipeline(client, settings).run()
