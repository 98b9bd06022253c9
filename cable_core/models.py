from __future__ import annotations

from dataclasses import dataclass

FUNCTION_POWER = "Power"
FUNCTION_LIGHTING = "Lighting"
FUNCTION_SIGNAL = "Signal"
FUNCTION_CONTROL = "Control"
FUNCTION_COMMUNICATION = "Communication"

POWER_FUNCTIONS = (FUNCTION_POWER, FUNCTION_LIGHTING)
SIGNAL_FUNCTIONS = (FUNCTION_SIGNAL, FUNCTION_CONTROL, FUNCTION_COMMUNICATION)


@dataclass(frozen=True)
class Cable:
    """
    Cable schedule row as seen by the engines.

    Units: voltage in V, current in A, length in ft (one-way).
    Optional fields are None when not entered; rules that need them are skipped.
    """

    tag: str = ""
    id: int | None = None
    function: str | None = None
    voltage: float | None = None
    current: float | None = None
    length: float | None = None
    size: str | None = None
    segregation_class: str | None = None
    route: str | None = None
    spare_percentage: float | None = None

    @property
    def is_power(self) -> bool:
        return self.function in POWER_FUNCTIONS

    @property
    def is_signal(self) -> bool:
        return self.function in SIGNAL_FUNCTIONS
