"""
Errors and advisory warnings for cycle diagnostics

Fatal conditions are raised to the immediate caller. Advisory conditions
(negative superheat, high compression ratio, ...) are CycleWarning
subclasses attached to a CycleState, never raised.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

from typing import Optional


class CycleDiagnosticsError(Exception):
    """Base class for all fatal diagnostics errors."""


class UnknownRefrigerantError(CycleDiagnosticsError, KeyError):
    """Refrigerant id is not present in the catalog."""

    def __init__(self, refrigerant_id: str):
        self.refrigerant_id = refrigerant_id
        super().__init__(f"Unknown refrigerant: {refrigerant_id!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class OutOfRangeError(CycleDiagnosticsError, ValueError):
    """
    Lookup falls outside the saturation table domain.

    Attributes:
        refrigerant_id: Refrigerant queried
        quantity: 'pressure', 'dew pressure' or 'temperature'
        value: Requested value
        minimum: Lowest value covered by the table
        maximum: Highest value covered by the table
    """

    def __init__(self, refrigerant_id: str, quantity: str, value: float,
                 minimum: float, maximum: float):
        self.refrigerant_id = refrigerant_id
        self.quantity = quantity
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{refrigerant_id}: {quantity}={value:g} outside catalog range "
            f"[{minimum:g}, {maximum:g}]"
        )


class IncompleteReadingError(CycleDiagnosticsError, ValueError):
    """A required field of the field reading is missing."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Required reading field missing: {field}")


class InvalidReadingError(CycleDiagnosticsError, ValueError):
    """Reading value is physically impossible (e.g. non-positive pressure)."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class CatalogConfigurationError(CycleDiagnosticsError, ValueError):
    """Reference data failed its load-time shape checks."""


# ========== Advisory warnings ==========

class CycleWarning(UserWarning):
    """Base class for non-fatal cycle advisories."""


class NegativeSuperheatWarning(CycleWarning):
    """Suction line colder than evaporating temperature (liquid flood-back)."""


class NegativeSubcoolingWarning(CycleWarning):
    """Liquid line warmer than condensing temperature (flash gas)."""


class HighCompressionRatioWarning(CycleWarning):
    """Compression ratio above the compressor overload limit."""


class HighDischargeTemperatureWarning(CycleWarning):
    """Discharge line temperature in the oil breakdown region."""


class HighTemperatureDifferenceWarning(CycleWarning):
    """Return air to evaporating temperature difference too large."""


class CoilFreezeRiskWarning(CycleWarning):
    """Evaporating temperature below freezing."""
