"""GeoLab access service: dual hierarchical access control for laboratory data."""

__version__ = "1.0.0"
