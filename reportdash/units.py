RAW_UNIT_THRESHOLD = 100000
MILLION = 1000000


def to_millions(value: float) -> float:
    """Rescale a figure to millions unless it already looks like one.

    Extraction rarely carries reliable unit metadata, so magnitude decides: anything
    above ``RAW_UNIT_THRESHOLD`` in absolute terms is read as raw currency units.
    """
    if not value:
        return 0.0
    if abs(value) > RAW_UNIT_THRESHOLD:
        return value / MILLION
    return value
