from __future__ import annotations

APP_ID = "sw-cli"
PURPOSE = "Generate a precaching service worker or a revisioned file manifest for a web app"

CONFIG_FILENAME = "sw-cli-config.yaml"
HELP_FILENAME = "cli-help.txt"

DEFAULT_SW_NAME = "sw.js"
DEFAULT_MANIFEST_NAME = "manifest.js"

LOG_LEVEL_ENV = "SW_CLI_LOG_LEVEL"
NO_COLOR_ENV = "NO_COLOR"

# Never offered as a web-app root or precached.
IGNORED_DIRECTORIES = frozenset({"node_modules"})
