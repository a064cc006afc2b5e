# File: const.py
"""Constants for the ScreenTime integration.

This file centralizes storage keys, defaults, bounds, domain names, event
names, service fields and scheduling intervals for consistency across the
integration.
"""

import logging
from datetime import timedelta

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
SCREENTIME_TITLE = "ScreenTime"

# Integration Domain
DOMAIN = "screentime"

# Logger
LOGGER = logging.getLogger(__package__)

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Managers
ALARM_MANAGER = "alarm_manager"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_KEY = "screentime_data"
STORAGE_VERSION = 1
STORAGE_SAVE_DELAY = 1  # seconds

# ------------------------------------------------------------------------------------------------
# Scheduling
# ------------------------------------------------------------------------------------------------
TICK_INTERVAL = timedelta(seconds=1)
ROLLOVER_CHECK_INTERVAL = timedelta(seconds=30)
ALARM_REPEAT_INTERVAL = timedelta(milliseconds=900)

# ------------------------------------------------------------------------------------------------
# Storage Layout
# ------------------------------------------------------------------------------------------------
DATA_SETTINGS = "settings"
DATA_RECORDS = "records"

# Settings keys
DATA_SETTINGS_CARRY_OVER_ENABLED = "carry_over_enabled"
DATA_SETTINGS_PARENT_PIN = "parent_pin"
DATA_SETTINGS_ALARM_TONE = "alarm_tone"
DATA_SETTINGS_ALARM_VOLUME = "alarm_volume"
DATA_SETTINGS_FULL_COMPLETION_MINUTES = "full_completion_minutes"
DATA_SETTINGS_FALLBACK_MINUTES = "fallback_minutes"
DATA_SETTINGS_FULL_COMPLETION_MINUTES_WEEKEND = "full_completion_minutes_weekend"
DATA_SETTINGS_FALLBACK_MINUTES_WEEKEND = "fallback_minutes_weekend"

# Settings keys holding allowance minutes (all share the same bounds)
SETTINGS_MINUTE_KEYS: tuple[str, ...] = (
    DATA_SETTINGS_FULL_COMPLETION_MINUTES,
    DATA_SETTINGS_FALLBACK_MINUTES,
    DATA_SETTINGS_FULL_COMPLETION_MINUTES_WEEKEND,
    DATA_SETTINGS_FALLBACK_MINUTES_WEEKEND,
)

# Daily record keys
DATA_RECORD_DATE = "date"
DATA_RECORD_CHECKS = "checks"
DATA_RECORD_CARRY_IN_SECONDS = "carry_in_seconds"
DATA_RECORD_LOCKED_ALLOCATION_MINUTES = "locked_allocation_minutes"
DATA_RECORD_REMAINING_SECONDS = "remaining_seconds"
DATA_RECORD_IS_RUNNING = "is_running"
DATA_RECORD_IS_ALARMING = "is_alarming"
DATA_RECORD_ANCHOR = "anchor"

# Checklist items (closed set)
CHECK_ITEM_PREPARATION = "preparation"
CHECK_ITEM_HOMEWORK = "homework"
CHECK_ITEM_BEDTIME = "bedtime"
CHECK_ITEM_DEPARTURE = "departure"

CHECK_ITEMS: tuple[str, ...] = (
    CHECK_ITEM_PREPARATION,
    CHECK_ITEM_HOMEWORK,
    CHECK_ITEM_BEDTIME,
    CHECK_ITEM_DEPARTURE,
)

# Alarm tones
ALARM_TONE_BEEP = "beep"
ALARM_TONE_CHIME = "chime"
ALARM_TONES: tuple[str, ...] = (ALARM_TONE_BEEP, ALARM_TONE_CHIME)

# ------------------------------------------------------------------------------------------------
# Defaults and Bounds
# ------------------------------------------------------------------------------------------------
DEFAULT_CARRY_OVER_ENABLED = False
DEFAULT_PARENT_PIN = "1234"
DEFAULT_ALARM_TONE = ALARM_TONE_BEEP
DEFAULT_ALARM_VOLUME = 70
DEFAULT_FULL_COMPLETION_MINUTES = 45
DEFAULT_FALLBACK_MINUTES = 15
DEFAULT_FULL_COMPLETION_MINUTES_WEEKEND = 45
DEFAULT_FALLBACK_MINUTES_WEEKEND = 15

MIN_ALLOWANCE_MINUTES = 1
MAX_ALLOWANCE_MINUTES = 180
MIN_ALARM_VOLUME = 0
MAX_ALARM_VOLUME = 100

# Whole-string match, ASCII digits only
PARENT_PIN_PATTERN = r"[0-9]{4}"

DEFAULT_ZERO = 0
SECONDS_PER_MINUTE = 60

# ------------------------------------------------------------------------------------------------
# Events and Signals
# ------------------------------------------------------------------------------------------------
# Bus event fired for every alarm sound trigger
EVENT_ALARM_TRIGGERED = f"{DOMAIN}_alarm_triggered"
EVENT_DATA_TONE = "tone"
EVENT_DATA_VOLUME = "volume"
EVENT_DATA_ENTRY_ID = "entry_id"

# Dispatcher signal suffixes (instance-scoped via get_event_signal)
SIGNAL_SUFFIX_ALARM_CHANGED = "alarm_changed"

# Signal payload keys
SIGNAL_DATA_ALARMING = "alarming"
SIGNAL_DATA_TONE = "tone"
SIGNAL_DATA_VOLUME = "volume"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_TOGGLE_CHECK = "toggle_check"
SERVICE_START_TIMER = "start_timer"
SERVICE_PAUSE_TIMER = "pause_timer"
SERVICE_FINISH_TIMER = "finish_timer"
SERVICE_RESET_TODAY = "reset_today"
SERVICE_UPDATE_SETTINGS = "update_settings"

SERVICES: tuple[str, ...] = (
    SERVICE_TOGGLE_CHECK,
    SERVICE_START_TIMER,
    SERVICE_PAUSE_TIMER,
    SERVICE_FINISH_TIMER,
    SERVICE_RESET_TODAY,
    SERVICE_UPDATE_SETTINGS,
)

# Service fields
FIELD_ITEM = "item"
FIELD_SKIP_CONFIRMATION = "skip_confirmation"
FIELD_PIN = "pin"
FIELD_NEW_PIN = "new_pin"

# ------------------------------------------------------------------------------------------------
# Errors and Translation Keys
# ------------------------------------------------------------------------------------------------
ERROR_INVALID_PIN = "Invalid parent PIN"
ERROR_INVALID_PIN_FORMAT = "PIN must be exactly four digits"
ERROR_CONFIRMATION_REQUIRED = (
    "Checklist is incomplete; starting now grants the fallback allowance of "
    "{} minutes. Call again with skip_confirmation to start anyway"
)
MSG_NO_ENTRY_FOUND = "No ScreenTime entry found"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"

# Config flow steps
CONFIG_FLOW_STEP_USER = "user"

# Diagnostics
DIAGNOSTICS_TODAY = "today"
DIAGNOSTICS_REDACT_KEYS: set[str] = {DATA_SETTINGS_PARENT_PIN}
