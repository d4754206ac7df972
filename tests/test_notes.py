"""Tests for compatibility-note parsing."""

import pytest

from rigcheck.engine.notes import parse_psu_recommendation


class TestParsePsuRecommendation:
    @pytest.mark.parametrize(
        "note, expected",
        [
            ("This GPU requires minimum 750W PSU for stable operation", 750),
            ("requires 750 W PSU", 750),
            ("650w psu recommended", 650),
            ("Use a 1000W\tPSU", 1000),
            ("850WPSU", 850),
        ],
    )
    def test_recognised_notes(self, note, expected):
        assert parse_psu_recommendation(note) == expected

    @pytest.mark.parametrize(
        "note",
        [
            None,
            "",
            "Runs cool under load",
            "Draws 250W under load",
            "PSU 750W",
        ],
    )
    def test_unrecognised_notes(self, note):
        assert parse_psu_recommendation(note) is None

    def test_first_match_wins(self):
        note = "Needs a 650W PSU, 750W PSU for overclocking"
        assert parse_psu_recommendation(note) == 650
