"""Default reference data: Australian expense categories and common providers."""

import logging

from basbook.database.base import Database

logger = logging.getLogger(__name__)

# (name, BAS label, deductible, description)
DEFAULT_CATEGORIES = [
    ("Software", "1B", True, "Software subscriptions and licenses (SaaS, tools, etc.)"),
    ("Hosting", "1B", True, "Web hosting, cloud services, servers"),
    ("Internet", "1B", True, "Internet service provider fees"),
    ("VPN", "1B", True, "VPN services for security"),
    ("Hardware", "1B", True, "Computer equipment, peripherals, devices"),
    ("Office Supplies", "1B", True, "Stationery, office consumables"),
    ("Professional Development", "1B", True, "Courses, training, certifications"),
    ("Subscriptions", "1B", True, "Business magazines, newsletters, memberships"),
    ("Domain & DNS", "1B", True, "Domain registration, DNS services"),
    ("Insurance", "1B", True, "Professional indemnity, public liability"),
    ("Accounting", "1B", True, "Accountant fees, tax agent services"),
    ("Bank Fees", "1B", True, "Business bank account fees"),
    ("Capital Purchases", "G10", True, "Capital acquisitions over $1,000"),
    ("Non-Deductible", "N/A", False, "Personal or non-deductible expenses"),
]

# (name, international, default category name, ABN/ARN)
DEFAULT_PROVIDERS = [
    ("VentraIP", False, "Hosting", "93166330331"),
    ("iinet", False, "Internet", "48068628937"),
    ("GitHub", True, "Software", None),
    ("Warp", True, "Software", None),
    ("Bytedance (Trae)", True, "Software", None),
    ("NordVPN", True, "VPN", None),
    ("Google Workspace", True, "Software", None),
    ("JetBrains", True, "Software", None),
    ("Apple (App Store)", True, "Software", None),
    ("Amazon AWS", True, "Hosting", None),
]


def seed_categories(db: Database) -> int:
    """Create the default categories unless any category exists.

    Returns:
        Number of categories created
    """
    existing = db.list_categories()
    if existing:
        logger.info("Skipping category seeding - %d categories already exist", len(existing))
        return 0

    for name, bas_label, is_deductible, description in DEFAULT_CATEGORIES:
        db.create_category(
            name=name,
            bas_label=bas_label,
            is_deductible=is_deductible,
            description=description,
        )
    logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)


def seed_providers(db: Database) -> int:
    """Create the default providers unless any provider exists.

    Default categories are linked by name, case-insensitively.

    Returns:
        Number of providers created
    """
    existing = db.list_providers()
    if existing:
        logger.info("Skipping provider seeding - %d providers already exist", len(existing))
        return 0

    category_ids = {category.name.lower(): category.id for category in db.list_categories()}

    for name, is_international, category_name, abn_arn in DEFAULT_PROVIDERS:
        category_id = category_ids.get(category_name.lower())
        if category_id is None:
            logger.warning('Category "%s" not found for provider "%s"', category_name, name)
        db.create_provider(
            name=name,
            is_international=is_international,
            default_category_id=category_id,
            abn_arn=abn_arn,
        )
    logger.info("Seeded %d default providers", len(DEFAULT_PROVIDERS))
    return len(DEFAULT_PROVIDERS)
