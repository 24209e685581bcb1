"""Aggregation of retained records into the report's bounded digest.

Ingest produces validated :class:`~rf_report_builder.models.records.DataRecord`
lists; this package reduces them to stats, samples and time span.
"""

from .aggregate import aggregate, compute_stats, compute_time_stats, select_samples

__all__ = [
    "aggregate",
    "compute_stats",
    "compute_time_stats",
    "select_samples",
]
