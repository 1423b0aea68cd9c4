"""Tests for the zone calculator (pure, no database)."""

import pytest

from app.core.exceptions import InvalidBenchmarkError
from app.intelligence.zones import (
    ZONE_NAMES,
    compute_zones,
    round_half_up,
    validate_benchmark,
    zone_for_intensity,
    zone_for_power,
    zone_number,
)


def _by_name(zones):
    return {z.zone_name: z for z in zones}


# ======================================================================
# Rounding
# ======================================================================


class TestRoundHalfUp:
    @pytest.mark.parametrize("value, expected", [(2.5, 3), (3.5, 4), (2.4999, 2), (0.5, 1), (137.5, 138)])
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected


# ======================================================================
# Zone computation
# ======================================================================


class TestComputeZones:
    def test_returns_seven_zones_in_order(self):
        zones = compute_zones(250)
        assert [z.zone_name for z in zones] == ZONE_NAMES
        assert [z.zone_number for z in zones] == [1, 2, 3, 4, 5, 6, 7]

    def test_ftp_250_power_bands(self):
        zones = _by_name(compute_zones(250))
        assert (zones["recovery"].power_min, zones["recovery"].power_max) == (0, 138)  # 137.5 rounds up
        assert (zones["endurance"].power_min, zones["endurance"].power_max) == (140, 188)  # 187.5 rounds up
        assert (zones["tempo"].power_min, zones["tempo"].power_max) == (190, 218)  # 217.5
        assert (zones["sweet_spot"].power_min, zones["sweet_spot"].power_max) == (220, 233)  # 232.5
        assert (zones["threshold"].power_min, zones["threshold"].power_max) == (235, 263)  # 262.5
        assert (zones["vo2max"].power_min, zones["vo2max"].power_max) == (265, 300)
        assert (zones["anaerobic"].power_min, zones["anaerobic"].power_max) == (303, 375)  # 302.5

    def test_hr_bands_with_lthr(self):
        zones = _by_name(compute_zones(250, lthr_bpm=170))
        assert (zones["recovery"].hr_min, zones["recovery"].hr_max) == (0, 116)  # 115.6
        assert (zones["endurance"].hr_min, zones["endurance"].hr_max) == (117, 141)  # 117.3, 141.1
        assert (zones["threshold"].hr_min, zones["threshold"].hr_max) == (170, 173)  # 173.4
        assert (zones["anaerobic"].hr_min, zones["anaerobic"].hr_max) == (180, 187)

    def test_hr_bands_unset_without_lthr(self):
        for zone in compute_zones(250):
            assert zone.hr_min is None
            assert zone.hr_max is None

    def test_deterministic(self):
        assert compute_zones(287, 171) == compute_zones(287, 171)

    def test_percent_bands_are_contiguous(self):
        zones = compute_zones(250)
        for prev, nxt in zip(zones, zones[1:]):
            assert nxt.ftp_percent_min == prev.ftp_percent_max + 1

    def test_descriptions_present(self):
        assert all(z.description for z in compute_zones(200))

    def test_power_bands_monotonic_for_every_ftp(self):
        for ftp in range(1, 600):
            zones = compute_zones(ftp)
            for zone in zones:
                assert zone.power_min <= zone.power_max
            for prev, nxt in zip(zones, zones[1:]):
                assert nxt.power_min >= prev.power_max, f"overlap at FTP {ftp}"

    @pytest.mark.parametrize("ftp", [100, 150, 213, 250, 333, 420, 599])
    def test_power_bands_strictly_increasing_for_realistic_ftp(self, ftp):
        zones = compute_zones(ftp)
        for prev, nxt in zip(zones, zones[1:]):
            assert nxt.power_min > prev.power_max


# ======================================================================
# Validation
# ======================================================================


class TestValidateBenchmark:
    @pytest.mark.parametrize("ftp", [0, -5, 600, 1000])
    def test_rejects_out_of_range_ftp(self, ftp):
        with pytest.raises(InvalidBenchmarkError) as exc:
            validate_benchmark(ftp, athlete_id=7)
        assert exc.value.field == "ftp_watts"
        assert exc.value.value == ftp
        assert exc.value.athlete_id == 7

    @pytest.mark.parametrize("lthr", [0, 220, 300])
    def test_rejects_out_of_range_lthr(self, lthr):
        with pytest.raises(InvalidBenchmarkError) as exc:
            validate_benchmark(250, lthr)
        assert exc.value.field == "lthr_bpm"

    def test_rejects_non_integer_ftp(self):
        with pytest.raises(InvalidBenchmarkError):
            validate_benchmark(250.5)

    def test_rejects_bool_ftp(self):
        with pytest.raises(InvalidBenchmarkError):
            validate_benchmark(True)

    @pytest.mark.parametrize("ftp, lthr", [(1, None), (599, 219), (250, 1)])
    def test_accepts_range_edges(self, ftp, lthr):
        validate_benchmark(ftp, lthr)

    def test_compute_zones_validates(self):
        with pytest.raises(InvalidBenchmarkError):
            compute_zones(600)


# ======================================================================
# Classification
# ======================================================================


class TestClassification:
    def test_zone_number(self):
        assert zone_number("recovery") == 1
        assert zone_number("anaerobic") == 7

    def test_zone_number_unknown(self):
        with pytest.raises(ValueError, match="Unknown zone"):
            zone_number("sprint")

    @pytest.mark.parametrize("power, expected", [
        (100, "recovery"),
        (138, "recovery"),
        (139, "endurance"),  # gap between rounded bands goes to the higher zone
        (250, "threshold"),
        (300, "vo2max"),
        (500, "anaerobic"),
    ])
    def test_zone_for_power(self, power, expected):
        assert zone_for_power(power, compute_zones(250)) == expected

    def test_zone_for_power_needs_zones(self):
        with pytest.raises(ValueError):
            zone_for_power(200, [])

    @pytest.mark.parametrize("intensity, expected", [
        (0.5, "recovery"),
        (0.7, "endurance"),
        (0.9, "sweet_spot"),
        (1.0, "threshold"),
        (1.1, "vo2max"),
        (2.0, "anaerobic"),
    ])
    def test_zone_for_intensity(self, intensity, expected):
        assert zone_for_intensity(intensity) == expected
