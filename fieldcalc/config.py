"""
Calculator Configuration.

Settings for the interactive shell. The arithmetic kernel itself has no
configuration: results are exact and independent of any setting here.
"""

from __future__ import annotations
from dataclasses import dataclass
import argparse
import logging


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CalculatorConfig:
    """
    Configuration for the interactive calculator.

    Attributes:
        name: Title shown in the banner
        prompt: Prompt for commands
        input_prompt: Prompt for the follow-up lines of DEF and EVAL
        show_banner: Print the banner and usage on start
        log_level: Name of the logging level

    Example:
        >>> config = CalculatorConfig(prompt="calc> ", log_level="DEBUG")
        >>> config.numeric_log_level
        10
    """

    name: str = "FIELDCALC"
    prompt: str = "> "
    input_prompt: str = ""
    show_banner: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate configuration."""
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, "
                             f"got {self.log_level!r}")
        if not self.name:
            raise ValueError("name must not be empty")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> CalculatorConfig:
        """Build a configuration from parsed command-line options."""
        return cls(
            prompt=args.prompt,
            show_banner=not args.no_banner,
            log_level=args.log_level,
        )

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level)

    def summary(self) -> str:
        """Return configuration summary string."""
        return (
            f"CalculatorConfig '{self.name}':\n"
            f"  Prompt: {self.prompt!r}\n"
            f"  Input prompt: {self.input_prompt!r}\n"
            f"  Banner: {'on' if self.show_banner else 'off'}\n"
            f"  Log level: {self.log_level}"
        )
