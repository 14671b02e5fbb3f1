from .checks import ALL_RULES, DEFAULT_RULES, detect_conflicts

__all__ = ["ALL_RULES", "DEFAULT_RULES", "detect_conflicts"]
