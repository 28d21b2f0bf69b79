"""Application configuration settings."""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Processor / simulator settings"""
    # Connection settings
    MDP_HOST: str = os.environ.get("MDP_HOST", "127.0.0.1")
    MDP_PORT: int = int(os.environ.get("MDP_PORT", "5000"))
    USE_IPV6: bool = os.environ.get("USE_IPV6", "false").lower() == "true"
    SERIAL_BAUD_RATE: int = 115200

    # Frame settings
    FRAME_BYTE_ORDER: str = os.environ.get("FRAME_BYTE_ORDER", "little")  # must match on both ends

    # Simulation settings
    SESSION_DURATION_S: float = float(os.environ.get("SESSION_DURATION_S", "30"))
    HEALTH_STATUS: str = os.environ.get("HEALTH_STATUS", "GOOD")

    # InfluxDB settings
    ENABLE_INFLUXDB: bool = os.environ.get("ENABLE_INFLUXDB", "false").lower() == "true"
    INFLUXDB_URL: str = os.environ.get("INFLUXDB_URL", "http://localhost:8086")
    INFLUXDB_ORG: str = os.environ.get("INFLUXDB_ORG", "ground")
    INFLUXDB_BUCKET: str = os.environ.get("INFLUXDB_BUCKET", "telemetry")
    INFLUXDB_TOKEN: str = os.environ.get("INFLUXDB_TOKEN", "")
    INFLUXDB_TIMEOUT_SECONDS: int = 3
    INFLUXDB_BATCH_SIZE: int = 500
    INFLUXDB_FLUSH_INTERVAL_MS: int = 1000

    # Test environment detection
    IS_TEST_ENV: bool = os.environ.get("PYTEST_CURRENT_TEST") is not None

    # Debug settings
    DEBUG_FRAME_DUMP: bool = os.environ.get("DEBUG_FRAME_DUMP", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL


# Global configuration instance
config = Config()
