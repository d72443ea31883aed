"""Engine configuration.

Settings that are not generator arguments: where templates live, where
relative output paths are anchored, and how malformed spec lists are
treated.  Generator flags on the command line are all forwarded to the
generator, so these settings come from the environment instead.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from .renderer import DEFAULT_TEMPLATE_DIR

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global engine configuration.

    Instances are created once by the CLI entry point (usually via
    :meth:`from_env`) and passed to the resolver, renderer and writer.
    """

    template_dir: Path = Field(
        default=DEFAULT_TEMPLATE_DIR, description="Directory holding the *.u.j2 templates"
    )
    output_dir: Path = Field(
        default=Path("."), description="Base directory for relative output paths"
    )
    strict_specs: bool = Field(
        default=False,
        description="Abort on malformed fields/operations JSON instead of using an empty list",
    )

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            UNIGEN_TEMPLATE_DIR, UNIGEN_OUTPUT_DIR, UNIGEN_STRICT_SPECS.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("UNIGEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["UNIGEN_TEMPLATE_DIR"])
        if os.environ.get("UNIGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["UNIGEN_OUTPUT_DIR"])
        if os.environ.get("UNIGEN_STRICT_SPECS"):
            kwargs["strict_specs"] = os.environ["UNIGEN_STRICT_SPECS"].strip().lower() in _TRUTHY
        return cls(**kwargs)
