import json
from sw.common.logger import log
from sw.common.setup import PATHS
from sw.util import now_iso


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.data / "settings.json"

# Default values for the settings section.
_SETTINGS_DEFAULTS = {
    "tick_hz": 60,
    "always_on_top": False,
    "confirm_reset": False,
}

# Per-key validity checks, anything failing these gets replaced by its default.
_SETTINGS_VALIDATORS = {
    "tick_hz": lambda v: isinstance(v, int) and not isinstance(v, bool) and 1 <= v <= 1000,
    "always_on_top": lambda v: isinstance(v, bool),
    "confirm_reset": lambda v: isinstance(v, bool),
}

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    return {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
        },
        "settings": dict(_SETTINGS_DEFAULTS),
    }

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings.json, filling in defaults for anything missing or invalid. Never raises for a bad file, a
# fresh default dict is returned instead.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            log.info("No existing settings.json found, loading fresh settings dict.")
            return build_default_settings()

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            state = json.load(f)
        if not isinstance(state, dict):
            raise TypeError(f"settings.json holds a {type(state).__name__}, expected an object")
        defaulted_values = set()

        # Validate the meta dict
        if "meta" not in state or not isinstance(state["meta"], dict):
            defaulted_values.add("meta")
            state["meta"] = {}
        if "schema_version" not in state["meta"] or not isinstance(state["meta"]["schema_version"], int):
            defaulted_values.add("meta.schema_version")
            state["meta"]["schema_version"] = _SCHEMA_VERSION

        # Validate the settings dict, fill in any necessary defaults
        if "settings" not in state or not isinstance(state["settings"], dict):
            defaulted_values.add("settings")
            state["settings"] = dict(_SETTINGS_DEFAULTS)
        else:
            for key, default in _SETTINGS_DEFAULTS.items():
                if key not in state["settings"] or not _SETTINGS_VALIDATORS[key](state["settings"][key]):
                    defaulted_values.add(f"settings.{key}")
                    state["settings"][key] = default

        if defaulted_values:
            log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing or invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return state
    # Fall back to fresh settings in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to default settings.",exc_info=True)
        return build_default_settings()

# Write the given settings dict to disk.
def save_settings(state):
    state.setdefault("meta", {})["saved_at"] = now_iso()
    state["meta"].setdefault("schema_version", _SCHEMA_VERSION)
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===
