"""
Circadian energy curve.

Most people peak late morning, dip after lunch and get a second wind in the
late afternoon. Hours are local to the caller.
"""

from focus_planner.core.models import EnergyLevel


def current_energy_level(hour: int) -> EnergyLevel:
    """
    Map an hour of the day (0-23) to the user's energy level.

    Scoring:
        - 09:00-12:00: high (morning peak)
        - 14:00-16:00: low (post-lunch trough)
        - 16:00-18:00: medium (second wind)
        - 06:00-09:00: medium (early ramp-up)
        - otherwise: low (evening/night)

    Args:
        hour: Hour of day; values outside 0-23 are clamped

    Returns:
        EnergyLevel for that hour
    """
    hour = max(0, min(23, int(hour)))

    if 9 <= hour < 12:
        return EnergyLevel.HIGH
    if 14 <= hour < 16:
        return EnergyLevel.LOW
    if 16 <= hour < 18:
        return EnergyLevel.MEDIUM
    if 6 <= hour < 9:
        return EnergyLevel.MEDIUM
    return EnergyLevel.LOW
