# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
"""

ENV_VARS = {
    # App / logging
    "MINDORA_APP_NAME": "App display name (default: Mindora).",
    "MINDORA_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Storage
    "MINDORA_DATA_DIR": "Local data directory (default: .local/mindora).",
    "MINDORA_STORAGE_BACKEND": "json | sqlite | memory (default: json).",
    "MINDORA_STORAGE_PATH": (
        "Storage file (default: <data_dir>/storage.json or <data_dir>/storage.sqlite3)."
    ),
    "MINDORA_STORAGE_KEY": "Key the task list is stored under (default: mindoraTasks).",
    # UI
    "MINDORA_CONFIRM_DELETE": "Ask before deleting a task (true/false, default: true).",
}
