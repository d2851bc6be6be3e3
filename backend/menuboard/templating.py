"""
MenuBoard — Jinja2 Template Setup
===================================

What:  The shared Jinja2Templates instance and the static asset directory.
Why:   Every page route renders through the same environment, so filters
       and globals are registered once.
How:   Templates and public assets ship inside the package and are located
       relative to this file, independent of the working directory.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
PUBLIC_DIR = PACKAGE_DIR / "public"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_price(value: float) -> str:
    """Render a menu price with two decimals, e.g. 6.5 -> '6.50'."""
    return f"{value:.2f}"


templates.env.filters["price"] = format_price
