"""Log setup for CLI runs; records carry the sync ``run_id`` and engine ``stage``."""
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [run_id=%(run_id)s stage=%(stage)s] - %(message)s"


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional run_id and stage fields."""
    def format(self, record):
        # fetcher and generator logs happen outside a run context
        if not hasattr(record, 'run_id'):
            record.run_id = '-'
        if not hasattr(record, 'stage'):
            record.stage = '-'
        return super().format(record)


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Send all logs to stdout through ``ContextFormatter``.

    Replaces handlers from an earlier call, so the CLI can be invoked more
    than once in one process. httpx request lines are only shown at DEBUG.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )
    debug = logging.getLogger().getEffectiveLevel() <= logging.DEBUG
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
