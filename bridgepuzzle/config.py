"""
Engine-wide settings for the bridge puzzle core.
"""

# Bridge geometry
VARIABLE_LENGTH = -1  # sentinel for "any orthogonal span"
LENGTH_TOLERANCE = 0.01
DEFAULT_MAX_NUM_BRIDGES = 2

# Bridge type defaults
DEFAULT_BRIDGE_TYPE_ID = "default"
DEFAULT_BRIDGE_COLOUR = "black"
DEFAULT_BRIDGE_WIDTH = 1.0
DEFAULT_BRIDGE_STYLE = "normal"
DEFAULT_BRIDGE_COUNT = 1

# Supported puzzle spec file suffixes
JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
