from .config_validators import normalize_choice, normalize_level

__all__ = ["normalize_choice", "normalize_level"]
