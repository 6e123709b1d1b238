"""
Regras de transição válidas entre estados da submissão.

Define o grafo da máquina: a sequência é estritamente ordenada e qualquer
etapa não-terminal pode falhar para ERROR.
"""

from fsm.states.submission import TERMINAL_STATES, SubmissionState

TransitionMap = dict[SubmissionState, frozenset[SubmissionState]]

# Chave: estado de origem / Valor: destinos permitidos
VALID_TRANSITIONS: TransitionMap = {
    SubmissionState.IDLE: frozenset({
        SubmissionState.VALIDATING,
    }),

    # VALIDATING: upload só quando há arquivo anexado
    SubmissionState.VALIDATING: frozenset({
        SubmissionState.UPLOADING,
        SubmissionState.SUBMITTING,
        SubmissionState.ERROR,
    }),

    SubmissionState.UPLOADING: frozenset({
        SubmissionState.UPLOADING,  # Atualização de progresso
        SubmissionState.SUBMITTING,
        SubmissionState.ERROR,
    }),

    SubmissionState.SUBMITTING: frozenset({
        SubmissionState.SUCCESS,
        SubmissionState.ERROR,
    }),

    SubmissionState.SUCCESS: frozenset(),
    SubmissionState.ERROR: frozenset(),
}


def get_valid_targets(state: SubmissionState) -> frozenset[SubmissionState]:
    """
    Retorna os destinos válidos para um estado de origem.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de destinos permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: SubmissionState, to_state: SubmissionState) -> bool:
    """
    Verifica se uma transição é permitida.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino

    Returns:
        True se a transição é permitida
    """
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in SubmissionState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        if VALID_TRANSITIONS.get(state, frozenset()):
            errors.append(f"Estado terminal {state.name} não deveria ter transições")

    # Todo estado não-terminal precisa de saída para ERROR, exceto IDLE
    for from_state, targets in VALID_TRANSITIONS.items():
        if from_state in TERMINAL_STATES or from_state is SubmissionState.IDLE:
            continue
        if SubmissionState.ERROR not in targets:
            errors.append(f"Estado {from_state.name} sem transição para ERROR")

    return errors
