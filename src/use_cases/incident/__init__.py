from use_cases.incident.notify_incidents_use_case import NotifyIncidentsUseCase

__all__ = [
    "NotifyIncidentsUseCase",
]
