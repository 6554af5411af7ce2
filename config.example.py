# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "STICKIES_APP_NAME": "Server name reported to agents (default: oscribble).",
    "STICKIES_LOG_LEVEL": "Console logging level (default: INFO).",
    "STICKIES_LOG_DIR": "Directory for task-stickies.log (default: <storage_root>/logs).",
    # Storage
    "STICKIES_STORAGE_ROOT": "Directory holding projects.json and per-project data (default: ~/.project-stickies).",
    # Connectors
    "STICKIES_TOOL_PREFIX": "Prefix for tool names (default: <app_name>_).",
    "STICKIES_CONSOLE_ENABLED": "Run the interactive console instead of the stdio server (true/false).",
}
