"""Settings for running Tape programs."""

from dataclasses import dataclass, asdict
import json


@dataclass
class TapeSettings:
    """
    Interpreter settings.

    max_call_depth bounds the number of nested function calls and
    max_loop_depth the nesting of loops; sleep_unit_ms is the delay per unit of
    cell value for the sleep opcode; show_error_context controls whether error
    messages include a source excerpt.

    The two depth limits share the Python stack: the defaults together stay
    well inside the default recursion limit.
    """
    max_call_depth: int = 200
    max_loop_depth: int = 64
    sleep_unit_ms: int = 100
    show_error_context: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.max_call_depth, int) or isinstance(self.max_call_depth, bool) or self.max_call_depth < 0:
            raise ValueError(f"max_call_depth must be a non-negative integer, got {self.max_call_depth!r}")

        if not isinstance(self.max_loop_depth, int) or isinstance(self.max_loop_depth, bool) or self.max_loop_depth < 0:
            raise ValueError(f"max_loop_depth must be a non-negative integer, got {self.max_loop_depth!r}")

        if not isinstance(self.sleep_unit_ms, int) or isinstance(self.sleep_unit_ms, bool) or self.sleep_unit_ms < 0:
            raise ValueError(f"sleep_unit_ms must be a non-negative integer, got {self.sleep_unit_ms!r}")

        if not isinstance(self.show_error_context, bool):
            raise ValueError(f"show_error_context must be a boolean, got {self.show_error_context!r}")

    @classmethod
    def create_default(cls) -> "TapeSettings":
        """Create a new TapeSettings object with default values."""
        return cls()

    @classmethod
    def load(cls, path: str) -> "TapeSettings":
        """
        Load settings from a JSON file.

        Keys missing from the file keep their default values.

        Args:
            path: Path to the settings file

        Returns:
            TapeSettings object with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
            ValueError: If a setting has an invalid value
        """
        defaults = cls.create_default()

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a JSON object: {path}")

        return cls(
            max_call_depth=data.get("max_call_depth", defaults.max_call_depth),
            max_loop_depth=data.get("max_loop_depth", defaults.max_loop_depth),
            sleep_unit_ms=data.get("sleep_unit_ms", defaults.sleep_unit_ms),
            show_error_context=data.get("show_error_context", defaults.show_error_context)
        )

    def save(self, path: str) -> None:
        """
        Save settings to a JSON file.

        Args:
            path: Path to save the settings file
        """
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=4)
