# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
The GitHub token is never read from the environment: `gist-todo auth setup` stores it
in TODO_TOKEN_PATH after validating it.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App name used in log lines (default: gist-todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths
    "TODO_DATA_DIR": "Local data directory (default: $XDG_DATA_HOME/gist-todo or ~/.local/share/gist-todo).",
    "TODO_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    "TODO_TOKEN_PATH": "GitHub token file, mode 0600 (default: <data_dir>/token).",
    "TODO_AUTH_CACHE_PATH": "Token validation cache (default: <data_dir>/auth_cache.json).",
    # Auth
    "TODO_AUTH_CACHE_TTL_SECONDS": "How long a validated token is trusted without a network check, minimum 1 (default: 3600).",
    # GitHub / gist
    "TODO_GITHUB_API_URL": "GitHub REST API base URL (default: https://api.github.com).",
    "TODO_GIST_DESCRIPTION": "Description that identifies the task gist (default: TodoCLI Task List).",
    "TODO_GIST_FILENAME": "File inside the gist holding the task list (default: todolist.json).",
    "TODO_HTTP_TIMEOUT_SECONDS": "Per-request timeout, minimum 1 (default: 30).",
}
