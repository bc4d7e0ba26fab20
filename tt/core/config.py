import json
from tt.common.logger import log
from tt.common.setup import PATHS


#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.data / "settings.json"

# Bounds for the tick period, in milliseconds.
MIN_TICK_INTERVAL_MS = 1
MAX_TICK_INTERVAL_MS = 1000

# Default values for every setting, along with the type each one must have.
_SETTINGS_DEFAULTS = {
    "tick_interval_ms": 10,
    "monotonic_ticks": True,
    "always_on_top": False,
    "confirm_reset": False,
    "font": "Calibri",
}

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    return dict(_SETTINGS_DEFAULTS)

# bool is a subclass of int, so it has to be ruled out explicitly for the numeric settings.
def _is_valid(key, value):
    default = _SETTINGS_DEFAULTS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))

# Converts the tick_interval_ms setting into the seconds value the controller works with.
def tick_interval_seconds(settings):
    ms = settings.get("tick_interval_ms", _SETTINGS_DEFAULTS["tick_interval_ms"])
    ms = max(MIN_TICK_INTERVAL_MS, min(MAX_TICK_INTERVAL_MS, ms))
    return ms / 1000.0

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings from SETTINGS_PATH, filling in defaults for anything missing or of the wrong type. Any read or parse
# error falls back to a fresh default dict.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            log.info(f"No existing settings.json found at '{SETTINGS_PATH}', loading default settings.")
            return build_default_settings()

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise TypeError(f"Expected a JSON object in settings.json, got {type(loaded).__name__}")

        settings = {}
        defaulted_values = set()
        for key, default in _SETTINGS_DEFAULTS.items():
            if key in loaded and _is_valid(key, loaded[key]):
                settings[key] = loaded[key]
            else:
                defaulted_values.add(key)
                settings[key] = default

        # Clamp the tick interval rather than throwing it away
        clamped = max(MIN_TICK_INTERVAL_MS, min(MAX_TICK_INTERVAL_MS, settings["tick_interval_ms"]))
        if clamped != settings["tick_interval_ms"]:
            log.warning(f"tick_interval_ms of {settings['tick_interval_ms']} is out of range, clamped to {clamped}")
            settings["tick_interval_ms"] = clamped

        if defaulted_values:
            log.warning(f"Successfully loaded settings from '{SETTINGS_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return settings
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to default settings.",exc_info=True)
        return build_default_settings()

# Write the given settings to disk under SETTINGS_PATH. Unknown keys are dropped.
def save_settings(settings):
    to_save = {key: settings.get(key, default) for key, default in _SETTINGS_DEFAULTS.items()}
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(to_save, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===
