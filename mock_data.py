"""
Seed Mock Data for the Maintenance Report Dashboard
===================================================
Following the natural data flow of the application:

1. USERS - An admin and the technicians working in the field
2. LOCATIONS - Sites where maintenance takes place
3. REPORTS - Field reports submitted by technicians, spread over the last month
4. CREDENTIALS - The two accounts that can log in to the demo

Everything is built relative to `now` so dashboards always have recent data.
"""
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from records.base import generate_id, utcnow
from records.location import Location
from records.report import Report, ReportStatus
from records.user import User, UserRole

# Number of generated reports on top of the three hand-written ones
GENERATED_REPORTS = 15
GENERATED_REPORT_DAYS = 30

# Fixed so the generated reports are the same on every start
RANDOM_SEED = 2025

ADMIN_ID = "test-admin-id"
TECHNICIAN_ID = "test-tech-id"

# For test/documentation purposes only; hashed with bcrypt when the store is built.
CREDENTIALS = {
    "wh135@whies.com": "sembarangsaja",
    "hendra@whies.com": "whies2025",
}


@dataclass
class SeedData:
    users: list[User] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)
    reports: list[Report] = field(default_factory=list)
    credentials: dict[str, str] = field(default_factory=dict)


# =============================================================================
# STEP 1: USERS
# =============================================================================

def _users(now: datetime) -> list[User]:
    rows = [
        (generate_id(), "admin@whiesindustri.com", "admin", "Admin User", "A001", UserRole.ADMIN),
        (generate_id(), "tech1@whiesindustri.com", "tech1", "Technician One", "T001", UserRole.TECHNICIAN),
        (generate_id(), "tech2@whiesindustri.com", "tech2", "Technician Two", "T002", UserRole.TECHNICIAN),
        # Accounts that can log in
        (ADMIN_ID, "wh135@whies.com", "wh135", "Admin User", "A001", UserRole.ADMIN),
        (TECHNICIAN_ID, "hendra@whies.com", "hendra", "Hendra Abdi", "T001", UserRole.TECHNICIAN),
    ]
    return [
        User(
            id=user_id,
            email=email,
            name=name,
            full_name=full_name,
            badge_number=badge,
            role=role,
            created_at=now,
            updated_at=now,
        )
        for user_id, email, name, full_name, badge, role in rows
    ]


# =============================================================================
# STEP 2: LOCATIONS
# =============================================================================

def _locations(now: datetime) -> list[Location]:
    rows = [
        ("Jakarta HQ", "Main headquarters in Jakarta"),
        ("Bandung Office", "Branch office in Bandung"),
        ("Surabaya Plant", "Production plant in Surabaya"),
    ]
    return [
        Location(id=generate_id(), name=name, description=description, created_at=now, updated_at=now)
        for name, description in rows
    ]


# =============================================================================
# STEP 3: REPORTS
# =============================================================================

def _report(
    technician: User,
    location: Location,
    *,
    unit_id: str,
    device_id: str,
    card_number: str,
    status: ReportStatus,
    date: datetime,
    description: str,
    notes: str,
    images: list[str],
) -> Report:
    return Report(
        id=generate_id(),
        technician_id=technician.id,
        technician_name=technician.full_name,
        badge_number=technician.badge_number,
        unit_id=unit_id,
        location_id=location.id,
        location_name=location.name,
        device_id=device_id,
        card_number=card_number,
        status=status,
        date=date,
        description=description,
        notes=notes,
        images=images,
        created_at=date,
        updated_at=date,
    )


def _reports(now: datetime, technicians: list[User], locations: list[Location]) -> list[Report]:
    tech1, tech2 = technicians
    reports = [
        _report(
            tech1, locations[0],
            unit_id="UNIT-001", device_id="DEV-001", card_number="CARD-001",
            status=ReportStatus.PENDING, date=now,
            description="Regular maintenance check completed",
            notes="No issues found during inspection",
            images=["/placeholder.svg", "/placeholder.svg"],
        ),
        _report(
            tech2, locations[1],
            unit_id="UNIT-002", device_id="DEV-002", card_number="CARD-002",
            status=ReportStatus.COMPLETED, date=now - timedelta(days=1),
            description="Replaced faulty component",
            notes="Component was showing signs of wear",
            images=["/placeholder.svg", "/placeholder.svg"],
        ),
        _report(
            tech1, locations[2],
            unit_id="UNIT-003", device_id="DEV-003", card_number="CARD-003",
            status=ReportStatus.REJECTED, date=now - timedelta(days=2),
            description="Emergency repair",
            notes="Insufficient details provided",
            images=["/placeholder.svg"],
        ),
    ]

    rng = random.Random(RANDOM_SEED)
    statuses = list(ReportStatus)
    for i in range(GENERATED_REPORTS):
        days_ago = rng.randrange(GENERATED_REPORT_DAYS)
        reports.append(_report(
            rng.choice(technicians),
            rng.choice(locations),
            unit_id=f"UNIT-{i + 10}",
            device_id=f"DEV-{i + 10}",
            card_number=f"CARD-{i + 10}",
            status=rng.choice(statuses),
            date=now - timedelta(days=days_ago),
            description=f"Routine check {i + 1}",
            notes=f"Notes for report {i + 1}",
            images=["/placeholder.svg"],
        ))
    return reports


def build_seed(now: datetime | None = None) -> SeedData:
    """Build the full seed, timestamps relative to `now`."""
    now = now or utcnow()
    users = _users(now)
    locations = _locations(now)
    reports = _reports(now, [users[1], users[2]], locations)
    return SeedData(
        users=users,
        locations=locations,
        reports=reports,
        credentials=dict(CREDENTIALS),
    )
