"""Section picker catalog.

The catalog lists every tag a user can add, grouped the way the section
picker presents them. It is descriptive only; rendering and defaults are
resolved through :mod:`pagekit.sections.registry`.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

PREVIEW_IMAGE_URL = "/api/placeholder/300/150"


@dc.dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One pickable section type."""

    type: str
    name: str
    description: str
    group_label: str
    preview_image_url: str = PREVIEW_IMAGE_URL


_GROUPS: tuple[tuple[str, tuple[tuple[str, str, str], ...]], ...] = (
    (
        "Header Sections",
        (
            ("header-classic", "Classic Header", "Traditional header with logo and horizontal navigation"),
            ("header-centered", "Centered Header", "Centered logo with navigation menu below"),
            ("header-minimal", "Minimal Header", "Clean and simple header design"),
            ("header-transparent", "Transparent Header", "Overlay header with transparent background"),
            ("header-sidebar", "Sidebar Header", "Mobile-friendly sidebar navigation"),
        ),
    ),
    (
        "Hero Sections",
        (
            ("hero-split", "Split Hero", "Text content on one side, image on the other"),
            ("hero-centered", "Centered Hero", "Centered content with background image"),
            ("hero-video", "Video Hero", "Hero section with background video"),
            ("hero-gradient", "Gradient Hero", "Modern hero with gradient background"),
            ("hero-animated", "Animated Hero", "Hero with animated elements and effects"),
        ),
    ),
    (
        "Slider/Carousel Sections",
        (
            ("slider-testimonials", "Testimonial Slider", "Scrolling customer reviews and feedback"),
            ("slider-portfolio", "Portfolio Slider", "Showcase work and projects in slider"),
            ("slider-features", "Feature Slider", "Highlight key features and benefits"),
            ("slider-hero", "Hero Slider", "Multiple hero slides with transitions"),
            ("slider-products", "Product Slider", "Product showcase with image carousel"),
        ),
    ),
    (
        "About Sections",
        (
            ("about-story", "Our Story", "Company history, mission and vision"),
            ("about-team", "Meet the Team", "Team member profiles and bios"),
            ("about-values", "Our Values", "Company values and core principles"),
            ("about-timeline", "Company Timeline", "Historical milestones and achievements"),
            ("about-stats", "Company Statistics", "Key numbers and achievements"),
        ),
    ),
    (
        "Services Sections",
        (
            ("services-grid", "Service Grid", "Services displayed in grid layout"),
            ("services-list", "Service List", "Detailed service descriptions in list"),
            ("services-tabs", "Service Tabs", "Tabbed interface for service categories"),
            ("services-cards", "Service Cards", "Interactive service cards with hover effects"),
            ("services-process", "Service Process", "Step-by-step service workflow"),
        ),
    ),
    (
        "Features Sections",
        (
            ("features-grid", "Feature Grid", "Platform features in organized grid"),
            ("features-comparison", "Feature Comparison", "Compare features side by side"),
            ("features-showcase", "Feature Showcase", "Highlight key product innovations"),
            ("features-benefits", "Feature Benefits", "Features with detailed benefits"),
            ("features-interactive", "Interactive Features", "Interactive feature demonstration"),
        ),
    ),
    (
        "Testimonials Sections",
        (
            ("testimonials-grid", "Testimonial Grid", "Customer reviews in grid layout"),
            ("testimonials-carousel", "Testimonial Carousel", "Sliding customer testimonials"),
            ("testimonials-wall", "Testimonial Wall", "Masonry layout of customer reviews"),
            ("testimonials-video", "Video Testimonials", "Customer video testimonials"),
            ("testimonials-featured", "Featured Testimonials", "Highlighted customer success stories"),
        ),
    ),
    (
        "Portfolio/Projects Sections",
        (
            ("portfolio-grid", "Portfolio Grid", "Project gallery in organized grid"),
            ("portfolio-masonry", "Portfolio Masonry", "Pinterest-style portfolio layout"),
            ("portfolio-slider", "Portfolio Slider", "Sliding project showcase"),
            ("portfolio-filter", "Filterable Portfolio", "Portfolio with category filters"),
            ("portfolio-showcase", "Portfolio Showcase", "Featured project highlights"),
        ),
    ),
    (
        "Pricing Sections",
        (
            ("pricing-cards", "Pricing Cards", "Standard pricing table with plans"),
            ("pricing-comparison", "Pricing Comparison", "Detailed feature comparison table"),
            ("pricing-toggle", "Pricing Toggle", "Monthly/yearly pricing switcher"),
            ("pricing-simple", "Simple Pricing", "Clean and minimal pricing display"),
            ("pricing-enterprise", "Enterprise Pricing", "Advanced pricing for business plans"),
        ),
    ),
    (
        "Contact Sections",
        (
            ("contact-form", "Contact Form", "Contact form with company information"),
            ("contact-info", "Contact Info", "Contact details with map integration"),
            ("contact-cta", "Contact CTA", "Call-to-action contact section"),
            ("contact-offices", "Office Locations", "Multiple office locations and contacts"),
            ("contact-support", "Support Center", "Customer support and help center"),
        ),
    ),
    (
        "Footer Sections",
        (
            ("footer-comprehensive", "Comprehensive Footer", "Full footer with all company links"),
            ("footer-minimal", "Minimal Footer", "Simple footer with essential links"),
            ("footer-newsletter", "Newsletter Footer", "Footer with email subscription"),
            ("footer-social", "Social Footer", "Footer focused on social media"),
            ("footer-corporate", "Corporate Footer", "Professional corporate footer"),
        ),
    ),
    (
        "Utility Sections",
        (
            ("faq-accordion", "FAQ Accordion", "Frequently asked questions with expandable answers"),
            ("timeline-vertical", "Timeline", "Company history and milestones timeline"),
            ("stats-grid", "Statistics", "Animated counters and key metrics"),
            ("newsletter-centered", "Newsletter Signup", "Email subscription with call-to-action"),
            ("cta-gradient", "Call to Action", "Focused call-to-action section"),
            ("cta-image", "CTA with Background", "Call-to-action with background image"),
            ("gallery-grid", "Image Gallery", "Photo gallery with lightbox and filters"),
        ),
    ),
)

SECTION_CATALOG: list[CatalogEntry] = [
    CatalogEntry(type=tag, name=name, description=description, group_label=label)
    for label, entries in _GROUPS
    for tag, name, description in entries
]


def catalog_groups() -> dict[str, list[CatalogEntry]]:
    """Return catalog entries keyed by group label, in picker order."""
    groups: dict[str, list[CatalogEntry]] = {}
    for entry in SECTION_CATALOG:
        groups.setdefault(entry.group_label, []).append(entry)
    return groups


def catalog_entry(tag: str) -> CatalogEntry | None:
    """Return the catalog entry for ``tag`` if the picker offers it."""
    return next((entry for entry in SECTION_CATALOG if entry.type == tag), None)


def first_tag_for(family: str, tags: cabc.Iterable[str] | None = None) -> str | None:
    """Return the first catalog tag belonging to ``family``.

    >>> first_tag_for("hero")
    'hero-split'
    """
    candidates = tags if tags is not None else (entry.type for entry in SECTION_CATALOG)
    prefix = f"{family}-"
    return next((tag for tag in candidates if tag == family or tag.startswith(prefix)), None)


def display_name(tag: str) -> str:
    """Return a human label for ``tag``, derived from the tag when unlisted.

    >>> display_name("hero-split")
    'Split Hero'
    >>> display_name("mystery-widget")
    'Mystery Widget'
    """
    entry = catalog_entry(tag)
    if entry is not None:
        return entry.name
    return " ".join(part.capitalize() for part in tag.split("-") if part)


__all__ = [
    "PREVIEW_IMAGE_URL",
    "SECTION_CATALOG",
    "CatalogEntry",
    "catalog_entry",
    "catalog_groups",
    "display_name",
    "first_tag_for",
]
