from .pso import PERSONAL_BEST_MODES, PSOConfig, PSOConfigData

__all__ = ["PSOConfig", "PSOConfigData", "PERSONAL_BEST_MODES"]
