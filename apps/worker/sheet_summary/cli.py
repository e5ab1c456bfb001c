import argparse
import dataclasses
import logging
import sys

from .config import load_settings
from .errors import SummaryError
from .periods import new_destination_title, select_prior_period_titles, today_in
from .pipeline import run_summary_pipeline
from .sheets import SheetsClient

logger = logging.getLogger(__name__)


def prior(settings, client=None):
    client = client or SheetsClient.from_settings(settings)
    today = today_in(settings.timezone)
    existing = client.list_existing_titles(settings.tab_range)
    titles = select_prior_period_titles(existing, today, settings.ignore_sheets)
    print(f"summary tab: {new_destination_title(today, settings.title_template)}")
    for title in titles:
        print(f"  {title}")
    if not titles:
        print("  (no prior-period tabs found)")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build last month's summary tab")
    parser.add_argument("--mode", choices=["run", "prior"], default="run")
    parser.add_argument("--grid_styling", action="store_true", help="also send the grid styling step")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except SummaryError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2
    if args.grid_styling:
        settings = dataclasses.replace(settings, enable_grid_styling=True)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.mode == "run":
            run_summary_pipeline(settings)
        elif args.mode == "prior":
            prior(settings)
    except SummaryError:
        logger.exception("Summary run aborted")
        return 1
    except Exception:
        logger.exception("Summary run failed unexpectedly")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
