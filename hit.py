"""
Defines the Hit class for representing one readout's position measurement.
"""

from dataclasses import dataclass

@dataclass
class Hit:
    """
    Represents a single reconstructed position from one readout.

    Attributes:
        event_id (int): event the measurement belongs to
        readout (str): name of the readout that produced it
        x_measured (float): reconstructed position in strip-pitch units
        x_true (float): true (Monte Carlo) position in strip-pitch units
    """
    event_id: int
    readout: str
    x_measured: float
    x_true: float

    @property
    def residual(self) -> float:
        return self.x_measured - self.x_true
