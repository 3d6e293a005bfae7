"""Global constants for the tileset editor."""

# Duration given to new frames; 0 holds the frame indefinitely
DEFAULT_FRAME_DURATION = 0

# Animation time units consumed by a bare update() call
DEFAULT_UPDATE_DELTA = 1

# Display name of a tileset that has never been saved
UNTITLED_NAME = "Untitled"

# Extension used for tileset documents
TILESET_FILE_EXTENSION = ".xml"

# Environment variable holding the default log level for the command line
LOG_LEVEL_ENV_VAR = "TILESET_EDITOR_LOG_LEVEL"

# Root logger name for the package
LOGGER_NAME = "tileset_editor"
