"""Default category set seeded into a fresh catalog."""

from __future__ import annotations

from typing import Final

from toolsync.domain.model import Category

# (slug, display name, description)
DEFAULT_CATEGORY_SPECS: Final[tuple[tuple[str, str, str], ...]] = (
    ("productivity", "Productivity", "Tools to boost your productivity and efficiency"),
    ("development", "Development", "Developer tools and resources"),
    ("design", "Design", "Design and creative tools"),
    ("marketing", "Marketing", "Marketing and growth tools"),
    ("analytics", "Analytics", "Data analytics and insights tools"),
    ("artificial-intelligence", "Artificial Intelligence", "AI assistants, models and agents"),
    ("communication", "Communication", "Messaging, email and collaboration"),
    ("finance", "Finance", "Payments, accounting and money management"),
    ("education", "Education", "Learning platforms and study tools"),
    ("security", "Security", "Privacy, identity and security tooling"),
    ("sales", "Sales", "CRM and sales enablement"),
    ("customer-support", "Customer Support", "Help desks and customer messaging"),
    ("e-commerce", "E-Commerce", "Online stores and commerce tooling"),
    ("hr-recruiting", "HR & Recruiting", "Hiring and people operations"),
    ("writing", "Writing", "Writing, blogging and publishing"),
    ("media", "Audio & Video", "Audio, video and streaming tools"),
    ("health", "Health & Fitness", "Health, fitness and wellbeing"),
)


def default_categories() -> list[Category]:
    return [
        Category(name=name, slug=slug, description=description)
        for slug, name, description in DEFAULT_CATEGORY_SPECS
    ]
