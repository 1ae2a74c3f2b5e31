"""Encoders for log entries, metric snapshots and stream stats."""
