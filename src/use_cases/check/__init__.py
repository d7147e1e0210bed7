from use_cases.check.run_checks_use_case import RunChecksUseCase

__all__ = [
    "RunChecksUseCase",
]
