"""Storage module for telemetry persistence."""

from .influxdb_client import InfluxDBClient

__all__ = ["InfluxDBClient"]
