import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.attributes import flag_modified

from qualifications.core.exceptions import ConflictError, NotFoundError
from qualifications.core.grading import MAX_PERCENT, as_points
from qualifications.db.session import unit_of_work
from qualifications.models.activity import Activity
from qualifications.models.qualification import Qualification
from qualifications.models.subject import Subject

logger = logging.getLogger(__name__)

CAP_EXCEEDED_MESSAGE = "The activity cannot be added, the percentage of the activity exceeds the allowed"


@dataclass
class ActivityOutcome:
    activity: Activity
    accepted: bool
    reason: str | None = None


class QualificationService:
    """Subject, qualification and activity operations for one request.

    Every mutation runs inside ``unit_of_work``. Qualification aggregates are
    loaded with a row lock and refreshed from the database before the cap is
    checked, and each successful mutation bumps the qualification version so a
    writer holding a stale copy fails instead of overshooting the cap.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # subjects

    def create_subject(self, owner_id: str, code: str, name: str) -> Subject:
        message = f"There is already a Subject with the code = {code}"
        try:
            with unit_of_work(self.db):
                if self.db.get(Subject, code) is not None:
                    raise ConflictError(message)
                subject = Subject.create(code=code, name=name, owner_id=owner_id)
                self.db.add(subject)
        except IntegrityError as exc:
            # Another request inserted the same code after the lookup above.
            raise ConflictError(message) from exc
        logger.info("Subject %s created for user %s", code, owner_id)
        return subject

    def list_subjects(self, owner_id: str) -> list[Subject]:
        stmt = (
            select(Subject)
            .where(Subject.owner_id == owner_id)
            .options(selectinload(Subject.qualifications).selectinload(Qualification.activities))
            .order_by(Subject.code)
        )
        return list(self.db.scalars(stmt).all())

    def get_subject(self, owner_id: str, code: str) -> Subject:
        stmt = (
            select(Subject)
            .where(Subject.code == code, Subject.owner_id == owner_id)
            .options(selectinload(Subject.qualifications).selectinload(Qualification.activities))
        )
        subject = self.db.scalar(stmt)
        if subject is None:
            raise NotFoundError(f"There is not Subject with the code = {code}")
        return subject

    def update_subject(self, owner_id: str, code: str, name: str | None = None) -> Subject:
        with unit_of_work(self.db):
            subject = self.get_subject(owner_id, code)
            if name is not None:
                subject.name = name
        return subject

    def delete_subject(self, owner_id: str, code: str) -> Subject:
        with unit_of_work(self.db):
            subject = self.get_subject(owner_id, code)
            self.db.delete(subject)
        logger.info("Subject %s deleted by user %s", code, owner_id)
        return subject

    # qualifications

    def get_qualification(self, owner_id: str, qualification_id: str) -> Qualification:
        stmt = (
            select(Qualification)
            .join(Qualification.subject)
            .where(Qualification.id == qualification_id, Subject.owner_id == owner_id)
            .options(selectinload(Qualification.activities))
        )
        qualification = self.db.scalar(stmt)
        if qualification is None:
            raise NotFoundError(f"There is no Qualification with the id = {qualification_id}")
        qualification.calculate()
        return qualification

    def _lock_qualification(self, owner_id: str, qualification_id: str) -> Qualification:
        stmt = (
            select(Qualification)
            .join(Qualification.subject)
            .where(Qualification.id == qualification_id, Subject.owner_id == owner_id)
            .options(selectinload(Qualification.activities))
            .with_for_update(of=Qualification)
            .execution_options(populate_existing=True)
        )
        qualification = self.db.scalar(stmt)
        if qualification is None:
            raise NotFoundError(f"There is no Qualification with the id = {qualification_id}")
        return qualification

    def _get_activity(self, owner_id: str, activity_id: str) -> Activity:
        stmt = (
            select(Activity)
            .join(Activity.qualification)
            .join(Qualification.subject)
            .where(Activity.id == activity_id, Subject.owner_id == owner_id)
        )
        activity = self.db.scalar(stmt)
        if activity is None:
            raise NotFoundError(f"There is not Activity with the id = {activity_id}")
        return activity

    def _recalculate(self, qualification: Qualification) -> None:
        qualification.calculate()
        # Force the versioned UPDATE even when the total did not move.
        flag_modified(qualification, "total")

    # activities

    def add_activity(
        self,
        owner_id: str,
        qualification_id: str,
        percent: Decimal,
        score: Decimal,
        name: str | None = None,
    ) -> ActivityOutcome:
        with unit_of_work(self.db):
            qualification = self._lock_qualification(owner_id, qualification_id)
            activity = Activity(name=name, percent=as_points(percent), score=as_points(score))
            if not qualification.add_activity(activity):
                logger.info(
                    "Rejected activity for qualification %s: %s%% + %s%% exceeds %s%%",
                    qualification_id,
                    qualification.total_activities_percent,
                    activity.percent,
                    MAX_PERCENT,
                )
                return ActivityOutcome(activity=activity, accepted=False, reason=CAP_EXCEEDED_MESSAGE)
            self._recalculate(qualification)
        logger.info("Activity %s added to qualification %s", activity.id, qualification_id)
        return ActivityOutcome(activity=activity, accepted=True)

    def update_activity(
        self,
        owner_id: str,
        activity_id: str,
        percent: Decimal | None = None,
        score: Decimal | None = None,
        name: str | None = None,
    ) -> ActivityOutcome:
        with unit_of_work(self.db):
            activity = self._get_activity(owner_id, activity_id)
            qualification = self._lock_qualification(owner_id, activity.qualification_id)
            if activity not in qualification.activities:
                raise NotFoundError(f"There is not Activity with the id = {activity_id}")
            new_percent = activity.percent if percent is None else percent
            new_score = activity.score if score is None else score
            if not qualification.edit_activity(activity, new_percent, new_score, name):
                logger.info(
                    "Rejected edit of activity %s: %s%% -> %s%% with %s%% allocated",
                    activity_id,
                    activity.percent,
                    new_percent,
                    qualification.total_activities_percent,
                )
                return ActivityOutcome(activity=activity, accepted=False, reason=CAP_EXCEEDED_MESSAGE)
            self._recalculate(qualification)
        logger.info("Activity %s updated in qualification %s", activity_id, qualification.id)
        return ActivityOutcome(activity=activity, accepted=True)

    def delete_activity(self, owner_id: str, activity_id: str) -> Activity:
        with unit_of_work(self.db):
            activity = self._get_activity(owner_id, activity_id)
            qualification = self._lock_qualification(owner_id, activity.qualification_id)
            removed = qualification.remove_activity(activity_id)
            if removed is None:
                raise NotFoundError(f"There is not Activity with the id = {activity_id}")
            self._recalculate(qualification)
        logger.info("Activity %s removed from qualification %s", activity_id, qualification.id)
        return removed
