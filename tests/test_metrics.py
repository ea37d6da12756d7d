import math

import pytest

from metrics import (
    DisplayProfile,
    PlayerReport,
    derive,
    format_duration,
    format_fixed,
    format_number,
    lookup,
    ratio,
)

PROFILE = DisplayProfile(display_name="s1mple", avatar_url="https://avatars.example/s1mple.jpg")


@pytest.fixture
def scenario_counters():
    return {
        "total_kills": 1500,
        "total_deaths": 1000,
        "total_shots_hit": 4500,
        "total_shots_fired": 10000,
        "total_matches_won": 40,
        "total_matches_played": 100,
    }


class TestLookup:
    def test_present_counter(self):
        assert lookup({"total_kills": 12}, "total_kills") == 12

    def test_present_zero(self):
        assert lookup({"total_kills": 0}, "total_kills") == 0

    def test_absent_counter_is_zero(self):
        assert lookup({}, "total_kills") == 0
        assert lookup({"total_deaths": 3}, "total_kills") == 0


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0"), (1, "1"), (999, "999"), (1000, "1,000"), (1234567, "1,234,567")],
    )
    def test_grouping(self, value, expected):
        assert format_number(value) == expected

    def test_integral_float(self):
        assert format_number(1234.0) == "1,234"

    def test_fraction_is_not_grouped(self):
        assert format_number(1234.56789) == "1,234.56789"


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "0h"),
            (3599, "0h"),
            (3600, "1h"),
            (82800, "23h"),
            (86399, "23h"),
            (86400, "1d 0h"),
            (90000, "1d 1h"),
            (475200, "5d 12h"),
        ],
    )
    def test_hours_and_days(self, seconds, expected):
        assert format_duration(seconds) == expected


class TestFormatFixed:
    def test_two_decimals(self):
        assert format_fixed(1.5, 2) == "1.50"

    def test_one_decimal(self):
        assert format_fixed(45.00000000000001, 1) == "45.0"

    def test_exact_tie_rounds_up(self):
        assert format_fixed(0.125, 2) == "0.13"

    def test_non_finite(self):
        assert format_fixed(math.nan, 1) == "NaN"
        assert format_fixed(math.inf, 2) == "Infinity"
        assert format_fixed(-math.inf, 2) == "-Infinity"

    def test_negative_zero(self):
        assert format_fixed(-0.0, 1) == "0.0"


class TestRatio:
    def test_plain(self):
        assert ratio(150, 100) == 1.5

    def test_zero_over_zero_is_nan(self):
        assert math.isnan(ratio(0, 0))

    def test_positive_over_zero_is_infinite(self):
        assert ratio(5, 0) == math.inf


class TestDerive:
    def test_scenario_combat(self, scenario_counters):
        combat = derive(scenario_counters, PROFILE).combat
        assert combat.kills == "1,500"
        assert combat.deaths == "1,000"
        assert combat.kd_ratio == "1.50"
        assert combat.accuracy == "45.0"
        assert ("Accuracy", "45.0%") in combat.fields()
        assert combat.headshots == "0"

    def test_scenario_match(self, scenario_counters):
        match = derive(scenario_counters, PROFILE).match
        assert match.matches_played == "100"
        assert match.matches_won == "40"
        assert match.win_rate == "40.0"
        assert ("Win Rate", "40.0%") in match.fields()
        assert match.mvps == "0"

    def test_scenario_absent_counters_render_zero(self, scenario_counters):
        report = derive(scenario_counters, PROFILE)
        assert report.general.time_played == "0h"
        for label, value in report.general.fields():
            if label == "Time Played":
                continue
            assert value in ("0", "$0")
        assert [v for _, v in report.popular_weapons.fields()] == ["0"] * 5
        assert [v for _, v in report.map_wins.fields()] == ["0"] * 5
        assert report.weapons.knife_kills == "0"
        assert report.weapons.grenade_kills == "0"

    def test_ratio_rounding(self):
        report = derive(
            {"total_kills": 150, "total_deaths": 100,
             "total_shots_hit": 450, "total_shots_fired": 1000},
            PROFILE,
        )
        assert report.combat.kd_ratio == "1.50"
        assert report.combat.accuracy == "45.0"

    def test_zero_denominators_are_rendered_verbatim(self):
        report = derive({"total_kills": 7}, PROFILE)
        assert report.combat.accuracy == "NaN"
        assert report.combat.kd_ratio == "Infinity"
        assert report.match.win_rate == "NaN"

    def test_general_group(self):
        report = derive(
            {
                "total_time_played": 475200,
                "total_planted_bombs": 1234,
                "total_defused_bombs": 56,
                "total_damage_done": 9876543,
                "total_money_earned": 12345678,
            },
            PROFILE,
        )
        assert report.general.fields() == [
            ("Time Played", "5d 12h"),
            ("Bombs Planted", "1,234"),
            ("Bombs Defused", "56"),
            ("Damage Done", "9,876,543"),
            ("Money Earned", "$12,345,678"),
        ]

    def test_weapon_and_map_groups_follow_fixed_order(self):
        counters = {
            "total_kills_ak47": 5000,
            "total_kills_m4a1": 4000,
            "total_kills_awp": 3000,
            "total_kills_glock": 2000,
            "total_kills_hkp2000": 1000,
            "total_wins_map_de_dust2": 50,
            "total_wins_map_de_inferno": 40,
            "total_wins_map_de_nuke": 30,
            "total_wins_map_de_vertigo": 20,
            "total_wins_map_de_train": 10,
            "total_kills_knife": 12,
            "total_kills_hegrenade": 34,
        }
        report = derive(counters, PROFILE)
        assert report.popular_weapons.fields() == [
            ("AK-47 Kills", "5,000"),
            ("M4A1-S Kills", "4,000"),
            ("AWP Kills", "3,000"),
            ("Glock-18 Kills", "2,000"),
            ("USP-S Kills", "1,000"),
        ]
        assert report.map_wins.fields() == [
            ("Dust II", "50"),
            ("Inferno", "40"),
            ("Nuke", "30"),
            ("Vertigo", "20"),
            ("Train", "10"),
        ]
        assert report.weapons.fields()[2:] == [("Knife Kills", "12"), ("Grenade Kills", "34")]

    def test_groups_order_and_profile_passthrough(self, scenario_counters):
        report = derive(scenario_counters, PROFILE)
        assert isinstance(report, PlayerReport)
        assert report.profile is PROFILE
        assert [g.title for g in report.groups()] == [
            "General",
            "Combat Stats",
            "Match Stats",
            "Weapon Stats",
            "Popular Weapons",
            "Map Wins",
        ]

    def test_input_is_not_mutated(self, scenario_counters):
        before = dict(scenario_counters)
        derive(scenario_counters, PROFILE)
        assert scenario_counters == before
