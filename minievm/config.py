"""
Interpreter configuration.

Values can be given directly or read from ``MINIEVM_*`` environment
variables, which is how the CLI picks up its defaults.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# What to do when a PUSH opcode has fewer operand bytes left than it needs:
#   skip - push nothing and advance past the opcode byte only; the leftover
#          bytes are then decoded as instructions
#   pad  - right-pad the leftover bytes with zeros and push the word
TRUNCATED_PUSH_SKIP = "skip"
TRUNCATED_PUSH_PAD = "pad"
TRUNCATED_PUSH_POLICIES = (TRUNCATED_PUSH_SKIP, TRUNCATED_PUSH_PAD)

ENV_TRUNCATED_PUSH = "MINIEVM_TRUNCATED_PUSH"
ENV_TRACE = "MINIEVM_TRACE"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


@dataclass(frozen=True)
class VMConfig:
    truncated_push: str = TRUNCATED_PUSH_SKIP
    trace: bool = False

    def __post_init__(self):
        if self.truncated_push not in TRUNCATED_PUSH_POLICIES:
            raise ValueError(
                f"Unknown truncated push policy {self.truncated_push!r}, "
                f"expected one of {', '.join(TRUNCATED_PUSH_POLICIES)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VMConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Raises:
            ValueError: If a variable holds an unsupported value
        """
        environ = os.environ if environ is None else environ
        truncated_push = environ.get(ENV_TRUNCATED_PUSH, TRUNCATED_PUSH_SKIP).strip().lower()
        trace = _parse_bool(ENV_TRACE, environ.get(ENV_TRACE, ""))
        return cls(truncated_push=truncated_push, trace=trace)


DEFAULT_CONFIG = VMConfig()
