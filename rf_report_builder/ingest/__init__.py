"""Ingest package - schema-free reading of delimited RF measurement tables.

This package handles:
- Delimiter detection from per-line field-count consistency
- Header / data-row boundary detection (headers synthesized when absent)
- Column-role inference (frequency / power / timestamp) from header keywords
- Cell cleaning: thousands separators, unit suffixes, epoch and ISO timestamps
- Input acquisition with a size ceiling and start/middle/end segments

Key objects:
- IngestConfig: keyword tables and thresholds, injected into the builder
- TableStructure: header decision and data-section lines
- ColumnAssignment: resolved column indices

Design principle:
- Every stage is deterministic; re-running on the same text gives the same result
- Bad cells never raise; the affected row (or only its timestamp) is dropped
"""
