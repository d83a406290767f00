"""decisiondash - Grafana dashboards for decision-service endpoints."""

__version__ = "0.1.0"
