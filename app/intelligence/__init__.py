"""Engine core algorithms: zones, progression, training load, trends."""

from app.intelligence.load import estimate_tss
from app.intelligence.progression import compute_adjustment
from app.intelligence.trends import detect_all_trends
from app.intelligence.zones import compute_zones

__all__ = ["compute_zones", "compute_adjustment", "estimate_tss", "detect_all_trends"]
