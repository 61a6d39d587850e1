"""
Tests for the section Timer.
"""

import pytest

from irisstats.core.compute.timing import Timer


class TestTimer:

    def test_sections_and_total(self):
        timer = Timer()
        timer.start()
        with timer.section('a'):
            pass
        with timer.section('b'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'a', 'b'}
        assert all(v >= 0 for v in result.values())

    def test_repeated_section_accumulates(self):
        timer = Timer()
        timer.start()
        for _ in range(3):
            with timer.section('pair'):
                pass
        timer.stop()
        assert list(timer.result()) == ['total_seconds', 'pair']

    def test_section_recorded_on_error(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ZeroDivisionError):
            with timer.section('boom'):
                1 / 0
        timer.stop()
        assert 'boom' in timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()
