from .config import Settings, SynthesisConfig, settings

__all__ = ["Settings", "SynthesisConfig", "settings"]
