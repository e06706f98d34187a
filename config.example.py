# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "FOCUSLIST_APP_NAME": "App display name (default: focuslist).",
    "FOCUSLIST_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "FOCUSLIST_DATA_DIR": "Local data directory (default: .local/focuslist).",
    "FOCUSLIST_SNAPSHOT_PATH": "Task snapshot JSON path (default: <data_dir>/tasks.json).",
    "FOCUSLIST_EXPORT_DIR": (
        "Default directory for /export and /export-recurring "
        "(default: <data_dir>; files todos.csv and recurring_templates.csv)."
    ),
    # Behaviour
    "FOCUSLIST_SAVE_ON_MUTATION": "Save the snapshot after every change (true/false, default: true).",
}
