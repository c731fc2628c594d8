"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(eager=True, template_dir="views")
    """

    # Compilation
    eager: bool = False  # Build resources at declaration instead of on compile()
    complete_match: bool = True  # Resource rules match the whole path by default
    default_domain: str = "-"

    # Output
    default_output: str = "html"
    ajax_output: str = "json"
    charset: str = "utf-8"

    # Templates (view output)
    template_dir: str | Path | None = None
    autoescape: bool = True

    # CLI
    log_level: str = "warning"
