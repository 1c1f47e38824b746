"""Collaborators supplying function definitions and running invocations."""

from offline_schedule.providers.serverless import ServerlessFunctionProvider, ServerlessInvoker

__all__ = [
    "ServerlessFunctionProvider",
    "ServerlessInvoker",
]
