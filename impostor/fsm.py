from __future__ import annotations

from statemachine import State, StateMachine

from impostor.api.models import LobbyPhase, LobbyState


class LobbyFSM(StateMachine):
    """FSM wrapper around LobbyState.

    open -> started is the only transition; started is terminal. Player-count
    and role rules live in the service layer, the FSM only guards the phase.
    """

    accepting_joins = State(LobbyPhase.open.value, value=LobbyPhase.open.value, initial=True)
    started = State(LobbyPhase.started.value, value=LobbyPhase.started.value, final=True)

    begin = accepting_joins.to(started)

    def __init__(self, lobby: LobbyState):
        self.lobby = lobby
        super().__init__(start_value=lobby.phase.value)

    def sync_phase_to_model(self) -> None:
        self.lobby.started = LobbyPhase(str(self.current_state.value)) == LobbyPhase.started
