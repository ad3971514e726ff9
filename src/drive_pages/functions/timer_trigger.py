"""Timer trigger blueprint — scheduled refresh of the Drive metadata index."""

import logging

import azure.functions as func

from drive_pages.config import load_config
from drive_pages.drive.client import drive_client_from_config
from drive_pages.index.metadata import metadata_index_from_config

logger = logging.getLogger(__name__)

bp = func.Blueprint()


@bp.timer_trigger(
    schedule="0 */5 * * * *",
    arg_name="timer",
    run_on_startup=False,
)
def timer_trigger(timer: func.TimerRequest) -> None:
    """Scheduled trigger that re-lists the drive and saves the index snapshot.

    Runs every 5 minutes so that fresh workers resolve paths from a listing
    at most a few minutes old.
    """
    logger.info("Timer trigger fired")

    try:
        if timer.past_due:
            logger.warning("Timer trigger is past due")

        config = load_config()
        client = drive_client_from_config(config)
        index = metadata_index_from_config(client, config)
        files = index.refresh()
        logger.info(
            "Index refresh complete — %d file(s) listed, %d addressable",
            len(files),
            len(index.nodes()),
        )

    except Exception:
        logger.exception("Timer trigger failed")
        raise
