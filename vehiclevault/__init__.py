"""VehicleVault: admin backend for vehicles, their brands/models and staff users."""

__version__ = "0.1.0"
