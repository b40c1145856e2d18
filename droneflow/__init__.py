"""DroneFlow - lifecycle tracking for drone survey projects and work orders."""

__version__ = "0.1.0"
