"""InfluxDB client for issued command storage."""

import logging
import os

import influxdb_client
from influxdb_client import Point
from influxdb_client.client.write_api import WriteOptions

import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import config
from protocol.commands import Command

logger = logging.getLogger(__name__)


class InfluxDBClient:
    """InfluxDB client wrapper used as a command sink.

    Writes are best effort: any failure is logged and the session goes on.
    """

    def __init__(self, role: str = "mdp"):
        self.role = role
        self.token = config.INFLUXDB_TOKEN or os.environ.get("INFLUXDB_TOKEN")
        self.client = None
        self.write_api = None
        self.frame_number = None

        if not self.token:
            logger.warning("INFLUXDB_TOKEN not set - InfluxDB writes will be disabled")
            return

        try:
            self.client = influxdb_client.InfluxDBClient(
                url=config.INFLUXDB_URL,
                token=self.token,
                org=config.INFLUXDB_ORG,
                timeout=config.INFLUXDB_TIMEOUT_SECONDS * 1000
            )
            # batched writes are flushed in the background, off the frame loop
            self.write_api = self.client.write_api(
                write_options=WriteOptions(
                    batch_size=config.INFLUXDB_BATCH_SIZE,
                    flush_interval=config.INFLUXDB_FLUSH_INTERVAL_MS
                ),
                error_callback=self._on_write_error
            )

            try:
                health = self.client.health()
                if health.status == "pass":
                    logger.info(f"InfluxDB client initialized successfully: {config.INFLUXDB_URL}")
                else:
                    logger.warning(f"InfluxDB health check failed: {health.status}")
                    self._disable_client()
            except Exception as e:
                logger.warning(f"InfluxDB connection test failed: {e} - InfluxDB writes will be disabled")
                self._disable_client()

        except Exception as e:
            logger.error(f"Failed to initialize InfluxDB client: {e} - InfluxDB writes will be disabled")
            self._disable_client()

    @property
    def enabled(self) -> bool:
        return self.client is not None and self.write_api is not None

    def _disable_client(self):
        """Close and drop the client."""
        try:
            if self.write_api:
                self.write_api.close()
            if self.client:
                self.client.close()
        except Exception as e:
            logger.debug(f"Error while disabling InfluxDB client: {e}")
        self.client = None
        self.write_api = None

    def begin_frame(self, frame_number: int) -> None:
        self.frame_number = frame_number

    def __call__(self, command: Command) -> None:
        self.write_command(command, self.frame_number)

    def _on_write_error(self, conf, data, exception):
        logger.error(f"Batched InfluxDB write failed: {exception} (continuing with session)")

    def write_command(self, command: Command, frame_number: int = None) -> bool:
        """Queue one issued command as a point. Returns True if queued."""
        if config.IS_TEST_ENV:
            logger.debug(f"Test environment detected, skipping InfluxDB write for {command.name}")
            return False

        if not self.enabled:
            logger.debug(f"InfluxDB client not initialized, skipping write for {command.name}")
            return False

        point = (
            Point("telemetry_command")
            .tag("command", command.name)
            .tag("role", self.role)
            .field("code", f"{command.value:016X}")
        )
        if frame_number is not None:
            point.field("frame", int(frame_number))

        try:
            self.write_api.write(bucket=config.INFLUXDB_BUCKET, org=config.INFLUXDB_ORG, record=point)
        except Exception as e:
            logger.error(f"Error writing {command.name} to InfluxDB: {e} (continuing with session)")
            return False
        return True

    def close(self):
        """Release the client."""
        try:
            if self.write_api:
                self.write_api.close()
            if self.client:
                self.client.close()
        except Exception as e:
            logger.error(f"Error during InfluxDB client cleanup: {e}")
        self.client = None
        self.write_api = None
