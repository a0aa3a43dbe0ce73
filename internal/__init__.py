from internal.health import HealthChecker, Status

__all__ = [
    "HealthChecker",
    "Status",
]
