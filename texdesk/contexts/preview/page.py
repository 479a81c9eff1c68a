"""
Paper Page Rendering

Wraps preview HTML in a standalone page that mimics a sheet of paper, with a
marker where the first page ends. Page geometry comes from named presets in
page_presets.yaml.

Examples:
    >>> html = render_page(latex_to_html(source))                 # US letter
    >>> html = render_page(latex_to_html(source), preset="a4")    # A4
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from omegaconf import OmegaConf

from texdesk.contexts.preview.logger import _log_debug

load_dotenv()
PACKAGE_DIR = Path(__file__).resolve().parent
PAGE_PRESETS_PATH = Path(os.getenv("PAGE_PRESETS_PATH", str(PACKAGE_DIR / "page_presets.yaml")))
TEMPLATES_PATH = PACKAGE_DIR / "templates"
PAGE_TEMPLATE = "page.html.jinja"

REQUIRED_PRESET_KEYS = ("width", "min_height", "padding", "font_family", "font_size", "line_height")


def load_page_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load page presets from YAML.

    Args:
        config_path: Optional path to presets file (defaults to PAGE_PRESETS_PATH)

    Returns:
        Dict mapping preset names to geometry dicts
        Example: {"letter": {"width": "8.5in", ...}, "a4": {...}}

    Raises:
        ValueError: If a preset is missing a required key
    """
    if config_path is None:
        config_path = PAGE_PRESETS_PATH

    presets = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    for name, preset in presets.items():
        missing = [key for key in REQUIRED_PRESET_KEYS if key not in preset]
        if missing:
            raise ValueError(f"Page preset '{name}' is missing keys: {missing}")

    return presets


class PageRenderer:
    """
    Renders preview markup into a full HTML page.

    Presets are loaded once per renderer instance.
    """

    def __init__(self, presets_path: Optional[Path] = None, templates_path: Optional[Path] = None):
        self.presets = load_page_presets(presets_path)
        self.env = Environment(
            loader=FileSystemLoader(str(templates_path or TEMPLATES_PATH)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Markup is already HTML
            autoescape=False,
            keep_trailing_newline=True,
        )

    def available_presets(self) -> list[str]:
        return list(self.presets.keys())

    def render(
        self,
        markup: str,
        preset: str = "letter",
        title: str = "Resume Preview",
        show_page_break: bool = True,
    ) -> str:
        """
        Render preview markup inside a paper page.

        Args:
            markup: Preview HTML from latex_to_html()
            preset: Page preset name (default: "letter")
            title: Document title
            show_page_break: Draw the "PAGE 1 END" marker (default: True)

        Returns:
            Standalone HTML document

        Raises:
            ValueError: If preset is not defined
        """
        if preset not in self.presets:
            raise ValueError(
                f"Page preset '{preset}' not found. Available presets: {self.available_presets()}"
            )

        template = self.env.get_template(PAGE_TEMPLATE)
        _log_debug(f"Rendering page with preset '{preset}' ({len(markup)} chars of markup)")
        return template.render(
            markup=markup,
            page=self.presets[preset],
            title=title,
            show_page_break=show_page_break,
        )


def render_page(markup: str, preset: str = "letter", **kwargs) -> str:
    """Render preview markup inside a paper page using the default presets."""
    return PageRenderer().render(markup, preset=preset, **kwargs)
