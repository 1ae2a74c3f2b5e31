"""Telemetry aggregation core: classification, buffering and sampling."""
