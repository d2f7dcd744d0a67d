# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file
in the working directory). Do NOT commit your .env.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "Title shown above the list (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console (stderr) log level (default: WARNING). The log file always gets DEBUG.",
    # Console
    "TASKLIST_DEFAULT_FILTER": "Filter active on start: all | completed | pending (default: all).",
    "TASKLIST_CLEAR_SCREEN": "Clear the terminal before each redraw (true/false, default: true).",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory for the db and tasklist.log (default: .local/tasklist).",
    "TASKLIST_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
}
