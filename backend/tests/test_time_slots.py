import pytest

from app.services.time_slots import (
    compute_slots,
    is_before,
    is_valid_hhmm,
    parse_hhmm,
    to_minutes,
    within_window,
)


class TestComputeSlots:
    def test_one_hour_window(self):
        assert compute_slots("09:00", "10:00", 30) == ["09:00", "09:30"]

    def test_degenerate_window_is_empty(self):
        assert compute_slots("09:00", "09:00", 30) == []

    def test_inverted_window_is_empty(self):
        assert compute_slots("17:00", "09:00", 30) == []

    def test_default_step_is_thirty_minutes(self):
        assert compute_slots("13:00", "14:00") == ["13:00", "13:30"]

    def test_hour_carry(self):
        assert compute_slots("09:45", "11:00", 45) == ["09:45", "10:30"]

    def test_partial_final_slot_starts_before_end(self):
        assert compute_slots("09:00", "10:15", 30) == ["09:00", "09:30", "10:00"]

    def test_zero_padding(self):
        assert compute_slots("00:05", "01:00", 20) == ["00:05", "00:25", "00:45"]

    def test_non_positive_step_rejected(self):
        with pytest.raises(ValueError):
            compute_slots("09:00", "10:00", 0)

    @pytest.mark.parametrize(
        "start,end,step",
        [
            ("09:00", "17:00", 30),
            ("08:15", "12:40", 25),
            ("00:00", "23:59", 60),
            ("10:10", "10:11", 7),
        ],
    )
    def test_sequence_properties(self, start, end, step):
        slots = compute_slots(start, end, step)

        assert slots[0] == start
        minutes = [to_minutes(slot) for slot in slots]
        assert minutes == sorted(set(minutes))
        assert all(value < to_minutes(end) for value in minutes)
        assert all(b - a == step for a, b in zip(minutes, minutes[1:]))

    def test_same_inputs_same_output(self):
        assert compute_slots("09:00", "12:00", 15) == compute_slots("09:00", "12:00", 15)


def test_parse_hhmm():
    assert parse_hhmm("07:05") == (7, 5)


def test_is_before_compares_hour_then_minute():
    assert is_before("09:59", "10:00")
    assert not is_before("10:00", "10:00")
    assert not is_before("10:30", "10:00")


def test_within_window_is_half_open():
    assert within_window("09:00", "09:00", "17:00")
    assert within_window("16:59", "09:00", "17:00")
    assert not within_window("17:00", "09:00", "17:00")
    assert not within_window("08:59", "09:00", "17:00")


@pytest.mark.parametrize("value,expected", [("09:00", True), ("23:59", True), ("24:00", False), ("9:00", False), ("09:60", False), ("\uff10\uff19:\uff10\uff10", False), ("09:00\n", False)])
def test_is_valid_hhmm(value, expected):
    assert is_valid_hhmm(value) is expected
