"""JSON schema for the tool settings file."""

from utils import constants

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "signing": {
            "type": "object",
            "properties": {
                "properties_file": {"type": "string", "minLength": 1},
                "encoding": {"type": "string", "minLength": 1},
                "base_dir": {"type": "string"},
                "build_type": {"type": "string", "enum": constants.BUILD_TYPES},
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"type": "string"},
                "log_to_console": {"type": "boolean"},
                "log_to_file": {"type": "boolean"},
                "colorful_console": {"type": "boolean"},
                "log_dir": {"type": "string", "minLength": 1},
            },
            "additionalProperties": False,
        },
    },
    "required": ["signing", "logging"],
    "additionalProperties": False,
}
