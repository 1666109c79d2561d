"""Constants shared across the CLI, configuration and editor modules."""

# Data directory defaults
DATA_DIR_NAME = "tasklog"
HOME_ENV_VAR = "TASKLOG_HOME"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_TASKS_FILE = "tasks.jsonl"

# Status display aliases
DEFAULT_TODO_ALIAS = "TODO"
DEFAULT_WIP_ALIAS = "WIP"
DEFAULT_DONE_ALIAS = "DONE"
DEFAULT_CANCELLED_ALIAS = "CANCELLED"

# Interactive note editing
NOTE_FILE_NAME = "NEW_NOTE.md"
PREVIOUS_NOTES_HELP_END_MARKER = "---------------------- >8 ----------------------\n"
