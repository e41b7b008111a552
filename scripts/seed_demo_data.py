from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import sys

from sqlalchemy import select

if __package__ is None or __package__ == "":
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from qualifications.core.config import get_settings
from qualifications.db.session import get_session_factory
from qualifications.models.subject import Subject
from qualifications.models.user import User
from qualifications.services.grading import QualificationService


DEMO_SUBJECTS = (
    ("DEMO-MAT", "Mathematics"),
    ("DEMO-PHY", "Physics"),
)

# (cort, name, percent, score)
DEMO_ACTIVITIES = (
    (1, "Homework", "20", "9"),
    (1, "Quiz", "30", "7.5"),
    (1, "Midterm exam", "50", "8"),
    (2, "Lab report", "40", "6"),
    (2, "Project", "60", "8.5"),
    (3, "Final exam", "100", "7"),
)


def main() -> None:
    settings = get_settings()
    session_factory = get_session_factory()

    with session_factory() as db:
        user = db.scalar(select(User).where(User.login == settings.bootstrap_user_login))
        if not user:
            raise RuntimeError("Bootstrap user not found. Run seed_user first.")

        service = QualificationService(db)
        for code, name in DEMO_SUBJECTS:
            existing = db.get(Subject, code)
            if existing:
                db.delete(existing)
                db.commit()

            subject = service.create_subject(owner_id=user.id, code=code, name=name)
            by_cort = {qualification.cort: qualification for qualification in subject.qualifications}
            for cort, activity_name, percent, score in DEMO_ACTIVITIES:
                outcome = service.add_activity(
                    owner_id=user.id,
                    qualification_id=by_cort[cort].id,
                    percent=Decimal(percent),
                    score=Decimal(score),
                    name=activity_name,
                )
                if not outcome.accepted:
                    raise RuntimeError(f"{code}: {outcome.reason}")

        subjects = service.list_subjects(owner_id=user.id)
        for subject in subjects:
            print(f"{subject.code} {subject.name}: definitive {subject.definitive}")

    print(f"Demo data seeded: {len(DEMO_SUBJECTS)} subjects with activities.")


if __name__ == "__main__":
    main()
