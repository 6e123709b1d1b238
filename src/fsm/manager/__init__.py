"""
Exports públicos do módulo fsm/manager.

Máquina de estados de uma tentativa de submissão.
"""

from fsm.manager.machine import SubmissionStateMachine, create_submission_fsm

__all__ = [
    "SubmissionStateMachine",
    "create_submission_fsm",
]
