"""Allow running with ``python -m offline_schedule``."""

from offline_schedule.cli import run

run()
