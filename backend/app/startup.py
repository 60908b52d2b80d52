"""
Application startup validation and initialization.

Configures logging, checks the configuration and database, creates missing
tables and (optionally) seeds the read-only catalog plus demo members.
"""

import logging
import sys
from datetime import time
from typing import List, Tuple

from sqlalchemy import text
import sqlalchemy as sa
from sqlalchemy.orm import Session

from core.config import settings, validate_production_config
from core.database import Base, SessionLocal, engine
from modules.members.models import Member, MemberRole
from modules.members.services import MemberService
from modules.reservations.models import Reservation, ReservationTime, Theme, WaitingEntry

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    Member.__tablename__,
    Theme.__tablename__,
    ReservationTime.__tablename__,
    Reservation.__tablename__,
    WaitingEntry.__tablename__,
]

SAMPLE_THEMES = [
    ("레벨1 탈출", "우리 모두 탈출해봐요!", "https://example.com/themes/level1.jpg"),
    ("레벨2 탈출", "조금 더 어려운 방입니다.", "https://example.com/themes/level2.jpg"),
    ("공포의 저택", "불이 꺼지면 시작됩니다.", "https://example.com/themes/mansion.jpg"),
]

SAMPLE_TIMES = [time(10, 0), time(12, 0), time(14, 0), time(16, 0), time(18, 0)]

SAMPLE_MEMBERS = [
    ("어드민", "admin@roomescape.com", "password", MemberRole.ADMIN),
    ("브라운", "brown@roomescape.com", "password", MemberRole.USER),
    ("솔라", "solar@roomescape.com", "password", MemberRole.USER),
]


def configure_logging():
    """Configure root logging once for the process"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_environment_config(self) -> bool:
        try:
            validate_production_config(settings)
        except ValueError as e:
            self.errors.append(f"Configuration validation failed: {str(e)}")
            return False

        if settings.is_development and "dev-secret" in settings.jwt_secret_key:
            self.warnings.append("Using development JWT_SECRET_KEY - change for production")
        return True

    def check_database_connection(self) -> bool:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except sa.exc.SQLAlchemyError as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_required_tables(self) -> bool:
        if not settings.is_production:
            bootstrap_schema()

        existing_tables = sa.inspect(engine).get_table_names()
        missing_tables = [t for t in REQUIRED_TABLES if t not in existing_tables]
        if missing_tables:
            self.errors.append(
                f"Missing database tables: {', '.join(missing_tables)}. "
                "Run migrations with: alembic upgrade head"
            )
            return False
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_required_tables),
        ]

        all_passed = True
        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False
                # Later checks need a reachable database
                if check_name == "Database Connection":
                    break

        return all_passed, self.errors, self.warnings


def bootstrap_schema():
    """Create any missing tables (development and tests; production uses alembic)"""
    Base.metadata.create_all(bind=engine)


def seed_sample_data(db: Session) -> bool:
    """Insert themes, times and demo members into an empty database"""
    if db.query(Member).first() is not None:
        return False

    for name, description, thumbnail in SAMPLE_THEMES:
        db.add(Theme(name=name, description=description, thumbnail=thumbnail))
    for start_at in SAMPLE_TIMES:
        db.add(ReservationTime(start_at=start_at))
    db.commit()

    member_service = MemberService(db)
    for name, email, password, role in SAMPLE_MEMBERS:
        member_service.add_member(name, email, password, role)

    logger.info(
        f"Seeded {len(SAMPLE_THEMES)} themes, {len(SAMPLE_TIMES)} times "
        f"and {len(SAMPLE_MEMBERS)} members"
    )
    return True


def run_startup_checks():
    """Run all startup steps; exits in production when a check fails"""
    logger.info("=" * 60)
    logger.info("Starting Roomescape Backend")
    logger.info(f"Environment: {settings.environment}")
    logger.info("=" * 60)

    validator = StartupValidator()
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"  {warning}")
    for error in errors:
        logger.error(f"  {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors!")
        sys.exit(1)
    elif not passed:
        logger.warning("Starting in development mode despite errors")
    else:
        logger.info("All startup checks passed")

    if passed and settings.seed_sample_data:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()

    return passed, warnings
