from decimal import Decimal
from types import SimpleNamespace

from qualifications import models  # noqa: F401
from qualifications.core.grading import (
    MAX_PERCENT,
    as_points,
    definitive_score,
    fits_cap,
    total_percent,
    weighted_total,
)
from qualifications.models.activity import Activity
from qualifications.models.qualification import Qualification
from qualifications.models.subject import Subject


def _item(percent, score=0):
    return SimpleNamespace(percent=percent, score=score)


def _activity(activity_id: str, percent: str, score: str = "0") -> Activity:
    return Activity(id=activity_id, percent=Decimal(percent), score=Decimal(score))


def _qualification(*activities: Activity) -> Qualification:
    qualification = Qualification(cort=1, total=Decimal("0"))
    for activity in activities:
        assert qualification.add_activity(activity)
    return qualification


def test_total_percent_of_empty_collection_is_zero():
    assert total_percent([]) == 0


def test_fits_cap_accepts_exact_cap_and_rejects_above():
    items = [_item(Decimal("60"))]
    assert fits_cap(items, Decimal("40"))
    assert not fits_cap(items, Decimal("40.01"))
    assert MAX_PERCENT == Decimal("100")


def test_fits_cap_is_exact_for_decimal_fractions():
    items = [_item(33.3), _item(33.3)]
    assert fits_cap(items, 33.4)


def test_weighted_total():
    assert weighted_total([]) == 0
    assert weighted_total([_item(Decimal("50"), Decimal("8"))]) == Decimal("4")
    assert weighted_total([_item(20, 10), _item(80, 5)]) == Decimal("6")


def test_weighted_total_does_not_clamp_scores():
    assert weighted_total([_item(100, 150)]) == Decimal("150")


def test_definitive_score_sums_totals():
    assert definitive_score([Decimal("4"), Decimal("2.5"), 0]) == Decimal("6.5")


def test_add_activity_keeps_total_percent_within_cap():
    qualification = Qualification(cort=1, total=Decimal("0"))
    percents = ["30", "25", "40", "10", "5", "1"]
    for index, percent in enumerate(percents):
        before = list(qualification.activities)
        accepted = qualification.add_activity(_activity(f"a{index}", percent))
        if not accepted:
            assert qualification.activities == before
        assert qualification.total_activities_percent <= MAX_PERCENT
    assert qualification.total_activities_percent == Decimal("100")
    assert len(qualification.activities) == 4


def test_add_and_calculate_scenario():
    qualification = Qualification(cort=1, total=Decimal("0"))

    assert qualification.add_activity(_activity("a1", "50", "8"))
    assert qualification.calculate() == Decimal("4")

    assert not qualification.add_activity(_activity("a2", "60", "5"))
    assert qualification.calculate() == Decimal("4")
    assert len(qualification.activities) == 1


def test_calculate_is_idempotent():
    qualification = _qualification(_activity("a1", "30", "7"), _activity("a2", "45", "9.5"))
    first = qualification.calculate()
    second = qualification.calculate()
    assert first == second == qualification.total


def test_calculate_on_empty_qualification_is_zero():
    qualification = Qualification(cort=2, total=Decimal("3"))
    assert qualification.calculate() == 0


def test_single_activity_total_is_score_times_percent():
    qualification = _qualification(_activity("a1", "35", "6"))
    assert qualification.calculate() == Decimal("6") * Decimal("35") / 100


def test_edit_activity_checks_the_percent_delta():
    edited = _activity("a1", "30", "5")
    qualification = _qualification(edited, _activity("a2", "60", "5"))
    assert qualification.total_activities_percent == Decimal("90")

    assert qualification.edit_activity(edited, Decimal("40"), Decimal("5"))
    assert qualification.total_activities_percent == Decimal("100")


def test_edit_activity_rejection_leaves_state_unchanged():
    edited = _activity("a1", "30", "5")
    qualification = _qualification(edited, _activity("a2", "60", "5"))
    qualification.calculate()
    total_before = qualification.total

    assert not qualification.edit_activity(edited, Decimal("41"), Decimal("9"), name="changed")
    assert edited.percent == Decimal("30")
    assert edited.score == Decimal("5")
    assert edited.name is None
    assert qualification.total_activities_percent == Decimal("90")
    assert qualification.calculate() == total_before


def test_remove_activity_reduces_percent_by_its_weight():
    removed = _activity("a1", "30", "10")
    qualification = _qualification(removed, _activity("a2", "50", "8"))
    qualification.calculate()

    assert qualification.remove_activity("a1") is removed
    assert qualification.total_activities_percent == Decimal("50")
    assert qualification.calculate() == Decimal("4")


def test_remove_unknown_activity_returns_none():
    qualification = _qualification(_activity("a1", "30"))
    assert qualification.remove_activity("missing") is None
    assert len(qualification.activities) == 1


def test_subject_create_provisions_three_empty_qualifications():
    subject = Subject.create(code="MAT101", name="Mathematics", owner_id="user-1")
    assert [qualification.cort for qualification in subject.qualifications] == [1, 2, 3]
    assert all(not qualification.activities for qualification in subject.qualifications)
    assert subject.definitive == 0


def test_subject_definitive_recalculates_every_qualification():
    subject = Subject.create(code="PHY", name="Physics", owner_id="user-1")
    first, second, _ = subject.qualifications
    first.activities.append(_activity("a1", "50", "8"))
    second.activities.append(_activity("a2", "100", "6"))

    assert subject.definitive == Decimal("10")
    assert first.total == Decimal("4")
    assert second.total == Decimal("6")


def test_edit_activity_outside_the_collection_is_rejected():
    qualification = _qualification(_activity("a1", "90", "5"))
    stray = _activity("stray", "50", "5")

    assert not qualification.edit_activity(stray, Decimal("60"), Decimal("5"))
    assert stray.percent == Decimal("50")
    assert len(qualification.activities) == 1
    assert qualification.total_activities_percent == Decimal("90")


def test_as_points_rounds_to_stored_precision():
    assert as_points("33.335") == Decimal("33.34")
    assert as_points(0.014) == Decimal("0.01")
    assert as_points(None) == Decimal("0.00")


def test_edit_activity_checks_the_rounded_percent():
    edited = _activity("a1", "10", "5")
    qualification = _qualification(edited, _activity("a2", "89.99", "5"))

    # 100.004 before rounding, exactly 100.00 once stored
    assert qualification.edit_activity(edited, Decimal("10.014"), Decimal("7.125"))
    assert edited.percent == Decimal("10.01")
    assert edited.score == Decimal("7.13")
    assert qualification.total_activities_percent == Decimal("100.00")
