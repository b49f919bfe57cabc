"""
Configuration module for the form engine.

Handles environment variables and default settings.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormEngineConfig:
    """Configuration settings for the form engine."""

    # Validation settings
    default_message: str = "This field is required"
    enforce_hidden_required: bool = False

    # Transient UI feedback ("Copied!", submit notices)
    feedback_seconds: float = 2.0

    # Logging
    log_level: str = "INFO"

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080

    # Playground settings
    demo_port: int = 7860

    # Output settings
    indent_json_output: int = 2

    def get_log_level(self) -> int:
        """Resolve the configured log level name to a logging constant."""
        level = getattr(logging, (self.log_level or "").upper(), None)
        return level if isinstance(level, int) else logging.INFO

    @classmethod
    def from_env(cls) -> "FormEngineConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            default_message=os.getenv("FORM_ENGINE_DEFAULT_MESSAGE", _defaults.default_message),
            enforce_hidden_required=os.getenv(
                "FORM_ENGINE_ENFORCE_HIDDEN_REQUIRED",
                str(_defaults.enforce_hidden_required).lower(),
            ).lower() == "true",
            feedback_seconds=float(os.getenv("FORM_ENGINE_FEEDBACK_SECONDS", str(_defaults.feedback_seconds))),
            log_level=os.getenv("FORM_ENGINE_LOG_LEVEL", _defaults.log_level),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
            demo_port=int(os.getenv("FORM_ENGINE_DEMO_PORT", str(_defaults.demo_port))),
            indent_json_output=int(os.getenv("FORM_ENGINE_INDENT_JSON", str(_defaults.indent_json_output))),
        )


config = FormEngineConfig.from_env()


def get_config() -> FormEngineConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormEngineConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
