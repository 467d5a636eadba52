from __future__ import annotations

from datetime import time

import pytest

from faculty_attendance.attendance.factory import AttendanceStrategyFactory, classify
from faculty_attendance.attendance.strategies.absent_strategy import AbsentStrategy
from faculty_attendance.attendance.strategies.late_strategy import LateStrategy
from faculty_attendance.attendance.strategies.normal_strategy import NormalStrategy
from faculty_attendance.core.enums import AttendanceStatus
from faculty_attendance.core.exceptions import ValidationError


def test_factory_picks_strategy_by_in_time():
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_in_time(in_time="00:00:00", threshold="08:15:00"), AbsentStrategy)
    assert isinstance(factory.for_in_time(in_time="08:15:00", threshold="08:15:00"), NormalStrategy)
    assert isinstance(factory.for_in_time(in_time="08:15:01", threshold="08:15:00"), LateStrategy)


def test_threshold_itself_counts_as_on_time():
    decision = classify("08:15:00", "08:15:00")

    assert decision.status == AttendanceStatus.ON_TIME
    assert decision.in_time == "08:15:00"


def test_short_times_are_normalized_before_comparison():
    assert classify("8:05", "08:15:00").in_time == "08:05:00"
    assert classify("8:05", "08:15:00").status == AttendanceStatus.ON_TIME
    assert classify(time(9, 30), "08:15").status == AttendanceStatus.LATE


@pytest.mark.parametrize("raw", [None, "", "00:00:00", "0:00"])
def test_missing_punch_is_absent(raw):
    decision = classify(raw, "08:15:00")

    assert decision.status == AttendanceStatus.ABSENT
    assert decision.in_time == "00:00:00"


def test_garbage_time_is_rejected():
    with pytest.raises(ValidationError):
        classify("half past eight", "08:15:00")
