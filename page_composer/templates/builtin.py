"""
Templates fournis par défaut (seedés dans la base si la table est vide).
"""
import copy
from typing import List

from ..blocks.base import DEFAULT_STYLES
from ..blocks.catalog import BLOCK_TEMPLATES
from .catalog import BLANK_TEMPLATE_ID, PageTemplate


def _block(block_type: str, styles: dict = None, **content) -> dict:
    """Bloc wire : contenu par défaut de la variante surchargé par `content`."""
    base = copy.deepcopy(BLOCK_TEMPLATES[block_type])
    base.update(content)
    return {"type": block_type, "content": base, "styles": {**DEFAULT_STYLES, **(styles or {})}}


BUILTIN_TEMPLATES: List[dict] = [
    {
        "id": BLANK_TEMPLATE_ID,
        "name": "Blank Page",
        "description": "Start from scratch with an empty page",
        "category": "landing",
        "sort_order": 0,
        "blocks": [],
    },
    {
        "id": "landing-classic",
        "name": "Classic Landing Page",
        "description": "Hero, features, social proof and a strong call to action",
        "category": "landing",
        "sort_order": 1,
        "blocks": [
            _block("hero"),
            _block("features"),
            _block("testimonial"),
            _block("cta"),
        ],
    },
    {
        "id": "sales-page",
        "name": "Sales Page",
        "description": "Long-form sales page with pricing and results",
        "category": "sales",
        "sort_order": 2,
        "theme": {"primaryColor": "#DC2626", "secondaryColor": "#F59E0B"},
        "blocks": [
            _block("hero", headline="The Offer Your Customers Have Been Waiting For"),
            _block("stats"),
            _block("features", headline="What You Get"),
            _block("pricing"),
            _block("testimonial"),
            _block("cta", headline="Don't Miss Out", buttonText="Buy Now"),
        ],
    },
    {
        "id": "course-launch",
        "name": "Course Launch",
        "description": "Present a course with a video, curriculum highlights and enrollment",
        "category": "course",
        "sort_order": 3,
        "theme": {"primaryColor": "#7C3AED", "borderRadius": "large"},
        "blocks": [
            _block("hero", headline="Master a New Skill in 30 Days", ctaText="Enroll Now", ctaUrl="#enroll"),
            _block("video", title="Course Preview"),
            _block("features", headline="What You'll Learn"),
            _block("pricing", headline="Enroll Today"),
        ],
    },
    {
        "id": "webinar-registration",
        "name": "Webinar Registration",
        "description": "Collect registrations for a live or recorded webinar",
        "category": "webinar",
        "sort_order": 4,
        "theme": {"primaryColor": "#0EA5E9"},
        "blocks": [
            _block("hero", headline="Free Live Training", ctaText="Save My Seat", ctaUrl="#register"),
            _block("features", headline="In This Webinar You'll Discover"),
            _block("form", headline="Register Now", submitButtonText="Save My Seat"),
        ],
    },
    {
        "id": "lead-magnet",
        "name": "Lead Magnet",
        "description": "Offer a free download in exchange for an email address",
        "category": "lead_magnet",
        "sort_order": 5,
        "theme": {"primaryColor": "#059669"},
        "blocks": [
            _block("hero", headline="Get Your Free Guide", ctaText="Download Now", ctaUrl="#form"),
            _block("text"),
            _block("form", headline="Where Should We Send It?", submitButtonText="Send Me the Guide"),
        ],
    },
    {
        "id": "coming-soon",
        "name": "Coming Soon",
        "description": "Announce a launch and build a waiting list",
        "category": "coming_soon",
        "sort_order": 6,
        "blocks": [
            _block("hero", headline="Something Big Is Coming", subheadline="Be the first to know when we launch", ctaText=""),
            _block("form", headline="Join the Waiting List", fields=[
                {"name": "email", "label": "Email", "type": "email", "required": True},
            ]),
        ],
    },
    {
        "id": "about-page",
        "name": "About Us",
        "description": "Tell your story with key numbers and a gallery",
        "category": "about",
        "sort_order": 7,
        "blocks": [
            _block("hero", headline="Our Story", ctaText=""),
            _block("text"),
            _block("stats", styles={"backgroundColor": "#f8fafc"}),
            _block("gallery", headline="Behind the Scenes"),
        ],
    },
    {
        "id": "portfolio",
        "name": "Portfolio",
        "description": "Showcase your work in a clean image gallery",
        "category": "portfolio",
        "sort_order": 8,
        "theme": {"primaryColor": "#111827", "borderRadius": "none"},
        "blocks": [
            _block("hero", headline="Selected Work", ctaText="Get in Touch", ctaUrl="#contact"),
            _block("gallery", headline="Projects"),
            _block("cta", headline="Let's Work Together", buttonText="Contact Me"),
        ],
    },
]


def builtin_templates() -> List[PageTemplate]:
    return [PageTemplate.model_validate(copy.deepcopy(t)) for t in BUILTIN_TEMPLATES]
