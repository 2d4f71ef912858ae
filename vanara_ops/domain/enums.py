"""Controlled enumerations for the vanara-ops domain.

Every categorical field in the domain MUST reference an enum defined here.
Detection types are the one exception: sensors may report free-form
categories, so ``DetectionType`` only names the ones the engine produces.
"""

from __future__ import annotations

from enum import Enum


class ThreatLevel(str, Enum):
    """Per-bot and fleet-wide threat classification."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class StationStatus(str, Enum):
    ACTIVE = "Active"
    OFFLINE = "Offline"


class Species(str, Enum):
    """Biomimetic disguise a bot is built around."""

    LANGUR = "Langur"
    CIVET = "Civet"
    OWL = "Owl"
    BIRDBOT = "BirdBot"
    RAIN_MIMIC = "RainMimic"


class Terrain(str, Enum):
    """Operating terrain.  Display only; it never alters simulation mechanics."""

    DAY = "Day"
    NIGHT = "Night"
    RAIN = "Rain"
    FOG = "Fog"
    FOREST = "Forest"
    BORDER = "Border"


class MotorState(str, Enum):
    STABLE = "Stable"
    SURGE = "Surge"


class CameraHealth(str, Enum):
    OPTIMAL = "Optimal"
    CALIBRATING = "Calibrating"


class DetectionType(str, Enum):
    """Detection categories produced by the engine itself."""

    MOTION = "Motion"
    THERMAL = "Thermal"
    ACOUSTIC = "Acoustic"
    UNKNOWN = "Unknown"
    AMMUNITION_TRANSPORT = "Ammunition Transport"
    HUMAN_PRESENCE = "Human Presence"


class EventName(str, Enum):
    """Names of outbound events handed to the notification sinks."""

    BOT_MOVE = "bot_move"
    CHARGING_STARTED = "charging_started"
    CHARGING_TICK = "charging_tick"
    CHARGING_COMPLETE = "charging_complete"
    DETECTION = "detection"
    STEALTH = "stealth"
    THREAT_SIMULATION = "threat_simulation"
    SELF_DESTRUCT = "self_destruct"
    HUMAN_PRESENCE_DETECTED = "human_presence_detected"
    REGISTER_THREAT = "register_threat"
    CONTROLS_CHANGED = "controls_changed"
    SYNC_LOGS = "sync_logs"
    BATTERY = "battery"


class SelfDestructPhase(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    EXECUTED = "executed"
