"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "vanara-ops"
    debug: bool = False
    log_level: str = "INFO"

    # Seed for the shared PRNG; unset means a fresh random run
    seed: int | None = None
    autostart: bool = True
    spotlight_bot_id: str = "VNR-07"

    # Cadences (seconds)
    health_tick_seconds: float = 1.0
    fleet_tick_seconds: float = 5.0
    detection_tick_seconds: float = 8.0
    presence_scan_seconds: float = 0.5
    anomaly_delay_seconds: float = 10.0
    self_destruct_tick_seconds: float = 1.0

    # Fleet economics
    drift_degrees: float = 0.005
    low_battery_threshold: int = 20
    arrival_radius_km: float = 5.0
    charge_step: int = 10
    drain_step: int = 3
    bot_threat_flip_probability: float = 0.05

    # Health telemetry
    motor_flip_probability: float = 0.05
    camera_flip_probability: float = 0.05
    fleet_threat_flip_probability: float = 0.06

    # Detections
    detection_history_cap: int = 31
    uncertain_confidence: float = 0.70

    # Presence scanning
    presence_threshold: float = 0.75
    presence_cooldown_seconds: float = 5.0
    threat_log_cap: int = 12

    # Self-destruct
    self_destruct_countdown: int = 5

    # Outbound events
    webhook_url: str = ""
    webhook_timeout_seconds: float = 5.0
    webhook_max_pending: int = 50
    recent_events_cap: int = 200

    model_config = {"env_prefix": "VANARA_"}


settings = Settings()
