import logging

from tool_directory.core.config import settings
from tool_directory.core.database import SessionLocal
from tool_directory.crud import crud_category
from tool_directory.schemas import auth as schemas_auth
from tool_directory.schemas.enums import Role
from tool_directory.services import profile_service, user_service

logger = logging.getLogger(__name__)

# (name, slug, description, icon, [(use case name, slug, description), ...])
CATEGORIES = [
    ("Sales", "sales", "Tools for sales teams and revenue generation", "TrendingUp", [
        ("Lead Generation", "lead-generation", "Find and qualify potential customers"),
        ("CRM Management", "crm-management", "Manage customer relationships"),
        ("Sales Analytics", "sales-analytics", "Track and analyze sales performance"),
    ]),
    ("Marketing", "marketing", "Marketing automation and campaign management", "Megaphone", [
        ("Email Marketing", "email-marketing", "Email campaign automation"),
        ("Social Media", "social-media", "Social media management"),
        ("Content Creation", "content-creation", "Create marketing content"),
    ]),
    ("Customer Success", "customer-success", "Customer support and success tools", "Users", [
        ("Help Desk", "help-desk", "Customer support ticketing"),
        ("Live Chat", "live-chat", "Real-time customer chat"),
        ("Knowledge Base", "knowledge-base", "Self-service documentation"),
    ]),
    ("Human Resources", "hr", "HR management and employee tools", "UserCheck", [
        ("Recruiting", "recruiting", "Talent acquisition and hiring"),
        ("Performance Management", "performance-management", "Employee performance tracking"),
        ("Payroll", "payroll", "Payroll and benefits management"),
    ]),
    ("Finance", "finance", "Financial planning and accounting tools", "DollarSign", [
        ("Accounting", "accounting", "Financial record keeping"),
        ("Invoicing", "invoicing", "Invoice generation and management"),
        ("Expense Management", "expense-management", "Track and manage expenses"),
    ]),
]


def seed_reference_data(db):
    """Create the category and use-case catalogue. Safe to run repeatedly."""
    for name, slug, description, icon, use_cases in CATEGORIES:
        category = crud_category.get_category_by_slug(db, slug)
        if not category:
            logger.info(f"[Seed] Creating category {slug}")
            category = crud_category.create_category(db, name=name, slug=slug, description=description, icon=icon)
        for uc_name, uc_slug, uc_description in use_cases:
            if not crud_category.get_use_case_by_slug(db, uc_slug):
                crud_category.create_use_case(
                    db, category_id=category.id, name=uc_name, slug=uc_slug, description=uc_description
                )


def seed_admin(db, email: str, password: str):
    user = user_service.get_user_by_email(db, email)
    if not user:
        logger.info(f"[Seed] Creating admin account {email}")
        user_service.create_user(
            db,
            schemas_auth.RegisterRequest(email=email, password=password, full_name="Administrator"),
            role=Role.ADMIN,
        )
        return

    profile = profile_service.get_profile(db, user.id)
    if profile and profile.role != Role.ADMIN.value:
        profile_service.update_role(db, profile, Role.ADMIN)


def create_initial_data():
    db = SessionLocal()
    try:
        seed_reference_data(db)
        if settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD:
            seed_admin(db, settings.FIRST_ADMIN_EMAIL, settings.FIRST_ADMIN_PASSWORD)
    finally:
        db.close()
