"""Load and validate pagekit site files.

A site file (``config/site.yaml`` by default) declares the project header,
the theme (a catalog base plus overrides), export destinations, and either
an ordered ``sections`` list or legacy template ``placements``. The primary
entry point is :func:`load_site_config`, which returns a :class:`SiteConfig`
ready for the exporter and the CLI.

Examples
--------
>>> from pagekit.config import load_site_config
>>> site = load_site_config("config/site.yaml")  # doctest: +SKIP
>>> site.theme.id  # doctest: +SKIP
'blue-sky'
"""

from .loader import load_site_config, read_site_file
from .models import ExportConfig, SiteConfig, SiteConfigError

__all__ = [
    "ExportConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
    "read_site_file",
]
