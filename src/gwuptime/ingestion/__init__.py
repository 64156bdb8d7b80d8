"""Ingestion layer.

Turns poll results into transition events and snapshots.  Nothing here
talks to the telemetry API; the poller is an external collaborator.
"""

__all__: list[str] = []
