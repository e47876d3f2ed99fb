"""
Renderers turn a parsed DeviceCollection into files in the output directory.
Each renderer receives the collection, a shared Jinja2 environment and output_dir.
"""

from pathlib import Path

from jinja2 import Environment

from ..normalize import format_size
from ..schema import DeviceCollection

from .report import render as render_report
from .tree import render as render_tree


def make_environment() -> Environment:
    env = Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["size"] = format_size
    return env


def run_all(collection: DeviceCollection, output_dir: Path) -> None:
    """Run every renderer into output_dir (created if missing)."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    env = make_environment()
    render_tree(collection, env, output_dir)
    render_report(collection, env, output_dir)
