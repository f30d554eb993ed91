GITKEEP_FILENAME = ".gitkeep"
GITIGNORE_FILENAME = ".gitignore"
CONFIG_FILENAME = ".gitkeepcfg"
GITKEEP_IGNORE_FILENAME = ".gitkeepignore"

DEFAULT_EXCLUDE_DIRS = [".git", "node_modules", ".next", "dist", "build"]

# Characters that may be backslash-escaped inside an ignore pattern
ESCAPABLE_CHARS = set("\\!*?[]{}()")
