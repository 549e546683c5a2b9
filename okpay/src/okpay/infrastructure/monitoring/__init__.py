"""Monitoring: Prometheus collectors."""
