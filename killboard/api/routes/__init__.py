from killboard.api.routes import health, statistics, users

__all__ = ["health", "statistics", "users"]
