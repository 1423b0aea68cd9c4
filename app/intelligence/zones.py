"""
Zone Calculator: benchmark to seven training zones.

A pure, deterministic mapping: the same FTP / LTHR always yields the same
seven bands.  Bands are ``round(benchmark * pct / 100)`` with half-up
rounding, evaluated in exact decimal arithmetic so that no float artefact
can move a boundary by one watt.

Zone table (percent of FTP / percent of LTHR)::

    1 recovery      0-55     0-68
    2 endurance    56-75    69-83
    3 tempo        76-87    84-94
    4 sweet_spot   88-93    95-105
    5 threshold    94-105  100-102
    6 vo2max      106-120  103-106
    7 anaerobic   121-150  106-110

The heart-rate table overlaps around threshold; it is kept as published.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Optional, Union

from app.core.exceptions import InvalidBenchmarkError
from app.schemas.zones import ZoneBand

# ======================================================================
# Vocabulary
# ======================================================================

ZONE_NAMES: list[str] = ["recovery", "endurance", "tempo", "sweet_spot", "threshold", "vo2max", "anaerobic", ]

FTP_RANGE = (1, 599)
LTHR_RANGE = (1, 219)


class _ZoneSpec(NamedTuple):
    name: str
    ftp_pct: tuple[int, int]
    lthr_pct: tuple[int, int]
    description: str


_ZONE_TABLE: list[_ZoneSpec] = [
    _ZoneSpec("recovery", (0, 55), (0, 68), "Active recovery, very easy spinning"),
    _ZoneSpec("endurance", (56, 75), (69, 83), "Aerobic base building, conversational pace"),
    _ZoneSpec("tempo", (76, 87), (84, 94), "Moderately hard, sustained effort"),
    _ZoneSpec("sweet_spot", (88, 93), (95, 105), "High aerobic training, efficient fitness gains"),
    _ZoneSpec("threshold", (94, 105), (100, 102), "Lactate threshold, ~1 hour sustainable"),
    _ZoneSpec("vo2max", (106, 120), (103, 106), "Maximal aerobic power, 3-8 min intervals"),
    _ZoneSpec("anaerobic", (121, 150), (106, 110), "Sprints and neuromuscular power, <3 min"),
]


def zone_number(zone: str) -> int:
    """1-based position of *zone* in the zone order.

    Raises:
        ValueError: if *zone* is not one of :data:`ZONE_NAMES`.
    """
    try:
        return ZONE_NAMES.index(zone) + 1
    except ValueError:
        raise ValueError(f"Unknown zone: '{zone}'. Available: {ZONE_NAMES}") from None


# ======================================================================
# Rounding
# ======================================================================


def round_half_up(value: Union[Decimal, float, int]) -> int:
    """Round to the nearest integer, halves away from zero (SQL ``ROUND``)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _scale(benchmark: int, pct: int) -> int:
    return round_half_up(Decimal(benchmark) * pct / 100)


# ======================================================================
# Validation
# ======================================================================


def validate_benchmark(ftp_watts: int, lthr_bpm: Optional[int] = None, athlete_id: Optional[int] = None, ) -> None:
    """Reject FTP / LTHR values outside the declared ranges.

    Raises:
        InvalidBenchmarkError: naming the offending field and value.
    """
    low, high = FTP_RANGE
    if isinstance(ftp_watts, bool) or not isinstance(ftp_watts, int) or not low <= ftp_watts <= high:
        raise InvalidBenchmarkError("ftp_watts", ftp_watts, athlete_id, allowed=f"{low}-{high}")

    if lthr_bpm is not None:
        low, high = LTHR_RANGE
        if isinstance(lthr_bpm, bool) or not isinstance(lthr_bpm, int) or not low <= lthr_bpm <= high:
            raise InvalidBenchmarkError("lthr_bpm", lthr_bpm, athlete_id, allowed=f"{low}-{high}")


# ======================================================================
# Zone computation
# ======================================================================


def compute_zones(ftp_watts: int, lthr_bpm: Optional[int] = None) -> list[ZoneBand]:
    """Map a benchmark to the seven training zones, in zone order.

    Args:
        ftp_watts: Functional Threshold Power, 1-599 W.
        lthr_bpm: Optional lactate-threshold heart rate, 1-219 bpm.  Without
            it the heart-rate bands are left unset.

    Raises:
        InvalidBenchmarkError: for out-of-range inputs.
    """
    validate_benchmark(ftp_watts, lthr_bpm)

    zones: list[ZoneBand] = []
    for number, spec in enumerate(_ZONE_TABLE, start=1):
        ftp_low, ftp_high = spec.ftp_pct
        lthr_low, lthr_high = spec.lthr_pct
        zones.append(ZoneBand(zone_name=spec.name, zone_number=number, power_min=_scale(ftp_watts, ftp_low),
                              power_max=_scale(ftp_watts, ftp_high),
                              hr_min=_scale(lthr_bpm, lthr_low) if lthr_bpm is not None else None,
                              hr_max=_scale(lthr_bpm, lthr_high) if lthr_bpm is not None else None,
                              ftp_percent_min=ftp_low, ftp_percent_max=ftp_high, lthr_percent_min=lthr_low,
                              lthr_percent_max=lthr_high, description=spec.description, ))
    return zones


# ======================================================================
# Classification
# ======================================================================


def zone_for_power(power_watts: float, zones: list[ZoneBand]) -> str:
    """Classify *power_watts* against a zone set.

    The first zone whose upper bound covers the value wins, so a value
    falling in the gap between two rounded bands goes to the higher zone.
    Anything above the top band is anaerobic.
    """
    if not zones:
        raise ValueError("Cannot classify power without zones")
    ordered = sorted(zones, key=lambda z: z.zone_number)
    for zone in ordered:
        if power_watts <= zone.power_max:
            return zone.zone_name
    return ordered[-1].zone_name


def zone_for_intensity(intensity_factor: float) -> str:
    """Classify an intensity factor (fraction of FTP) into a zone name."""
    pct = intensity_factor * 100.0
    for spec in _ZONE_TABLE:
        if pct <= spec.ftp_pct[1]:
            return spec.name
    return _ZONE_TABLE[-1].name
