"""Common literal values used across pagekit.

These constants keep CDN references, CSS naming, and fallback copy in one
place so templates, the exporter, and tests import the same values.

Examples
--------
>>> from pagekit import _constants
>>> _constants.CSS_VARIABLE_TEMPLATE.format(category="color", role="text-secondary")
'--color-text-secondary'
"""

CSS_VARIABLE_TEMPLATE = "--{category}-{role}"

GOOGLE_FONTS_URL = "https://fonts.googleapis.com/css2"
GOOGLE_FONT_WEIGHTS = "300;400;500;600;700;800;900"
TAILWIND_CDN_URL = "https://cdn.tailwindcss.com?plugins=forms,typography,aspect-ratio"
FONT_AWESOME_URL = (
    "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.4.0/css/all.min.css"
)

PLACEHOLDER_MESSAGE = "Content not available"
SITE_DESCRIPTION = "Professional website built with pagekit"

DEFAULT_CONFIG_PATH = "config/site.yaml"
DEFAULT_OUTPUT_PATH = "public/index.html"
ARCHIVE_INDEX_NAME = "index.html"
ARCHIVE_ASSETS_DIR = "uploads"
