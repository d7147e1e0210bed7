from use_cases.summary.update_summary_use_case import UpdateSummaryUseCase

__all__ = [
    "UpdateSummaryUseCase",
]
