"""HTTP API for DroneFlow."""
