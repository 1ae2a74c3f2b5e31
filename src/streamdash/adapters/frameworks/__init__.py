"""Framework adapters exposing a dashboard session over HTTP."""
