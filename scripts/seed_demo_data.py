"""Seed idempotent demo data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

import app.modules  # noqa: F401
from app.core.config import get_settings
from app.core.database import SessionLocal, close_engine
from app.core.enums import RoleEnum
from app.core.security import create_access_token
from app.modules.courses.models import Course
from app.modules.identity.models import User

DEMO_TUTOR_EMAIL = "demo-tutor@tutortrail.dev"
DEMO_TOURIST_EMAIL = "demo-tourist@tutortrail.dev"

DEMO_COURSES = (
    ("Tea ceremony basics", "Kyoto", "Whisk, bow and sip through a two-hour chanoyu session."),
    ("Calligraphy for travellers", "Kyoto", "Brush strokes and your name in kanji."),
)


@dataclass(slots=True)
class SeedStats:
    users_created: int = 0
    users_updated: int = 0
    courses_created: int = 0
    tokens: dict[str, str] = field(default_factory=dict)


async def _ensure_user(
    session: AsyncSession,
    *,
    email: str,
    name: str,
    role: RoleEnum,
    country: str | None = None,
) -> tuple[User, bool]:
    user = await session.scalar(select(User).where(User.email == email))
    created = False
    if user is None:
        user = User(email=email, name=name, role=role, country=country, is_active=True)
        session.add(user)
        created = True
    else:
        user.name = name
        user.role = role
        user.is_active = True

    await session.flush()
    return user, created


async def _ensure_courses(session: AsyncSession, tutor: User) -> int:
    created = 0
    for title, location, description in DEMO_COURSES:
        existing = await session.scalar(
            select(Course).where(Course.tutor_id == tutor.id, Course.title == title),
        )
        if existing is not None:
            continue
        session.add(Course(tutor_id=tutor.id, title=title, location=location, description=description))
        created += 1
    await session.flush()
    return created


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()

    async with SessionLocal() as session:
        try:
            tutor, tutor_created = await _ensure_user(
                session,
                email=DEMO_TUTOR_EMAIL,
                name="Demo Tutor",
                role=RoleEnum.TUTOR,
                country="JP",
            )
            tourist, tourist_created = await _ensure_user(
                session,
                email=DEMO_TOURIST_EMAIL,
                name="Demo Tourist",
                role=RoleEnum.TOURIST,
            )
            stats.users_created = sum([tutor_created, tourist_created])
            stats.users_updated = 2 - stats.users_created
            stats.courses_created = await _ensure_courses(session, tutor)

            await session.commit()
        except Exception:
            await session.rollback()
            raise

    stats.tokens = {
        "tutor": create_access_token(str(tutor.id)),
        "tourist": create_access_token(str(tourist.id)),
    }
    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Seed idempotent demo data for TutorTrail (tutor, tourist, courses).",
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Users created: {stats.users_created}")
    print(f"- Users updated: {stats.users_updated}")
    print(f"- Courses created: {stats.courses_created}")
    print("")
    print("Demo bearer tokens (non-production only):")
    for role, token in stats.tokens.items():
        print(f"- {role}: {token}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
