"""Adapters connecting the telemetry core to sources and frameworks."""
