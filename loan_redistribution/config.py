from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "REDISTRIBUTION_"}

    # Optimizer budget (shared across restarts)
    max_evaluations: int = 100_000
    max_restarts: int = 3

    # Nelder-Mead convergence: best-value spread and simplex size
    fatol: float = 1e-10
    xatol: float = 1e-7

    # Initial simplex edge, as a fraction of the even principal share
    simplex_step: float = 0.05

    # Result validation
    result_tolerance: Decimal = Decimal("0.01")
    validate_last_row: bool = False  # last row absorbs the reconciliation residual

    # SAC principal and interest are fully determined; skip the optimizer
    closed_form_sac: bool = False

    log_level: str = "INFO"


settings = Settings()
