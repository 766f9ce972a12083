class SimulationError(RuntimeError):
    """Base class for errors raised by the simulator."""


class InvalidParameter(SimulationError, ValueError):
    """
    Raised at the configuration boundary for non-finite, non-positive or
    otherwise unusable parameters, before they can reach the pricing math.
    """

    def __init__(self, name: str, value: object, reason: str = "must be a positive finite number"):
        self.name = name
        self.value = value
        super().__init__(f"{name}={value!r}: {reason}")
