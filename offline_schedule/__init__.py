"""offline-schedule: run serverless scheduled events against local handlers."""

__version__ = "0.1.0"
