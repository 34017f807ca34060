"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All changes go through start() or apply().

Design principles:
- (state, action) -> ActionResult with a new state
- Works on a copy: a failed command leaves the input untouched
- Validates before applying; bad input raises MalformedInputError
- Delegates the automated opponent's choice to a StrategyPolicy
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .state import GameConfig, GameState, Player
from .action import Action, ActionType, ActionResult, Event
from .errors import MalformedInputError
from ..bots.entropy import EntropySource, SystemEntropy, new_salt

log = logging.getLogger("pebbles.reducer")


def validate_config(config: GameConfig) -> None:
    """Reject empty piles and zero turn caps."""
    if config.total_pebbles < 1:
        raise MalformedInputError(
            "total_pebbles must be at least 1",
            field="total_pebbles",
            value=config.total_pebbles,
        )
    if config.max_per_turn < 1:
        raise MalformedInputError(
            "max_per_turn must be at least 1",
            field="max_per_turn",
            value=config.max_per_turn,
        )


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the entropy oracle, which is consumed
    by coin flips and Easy moves.
    """
    entropy: EntropySource = field(default_factory=SystemEntropy)

    def start(self, config: GameConfig, salt: bytes | None = None) -> ActionResult:
        """
        Build the initial state for a new game.

        If the automated player wins the coin flip it moves at once.
        No event is produced for that opening move.
        """
        validate_config(config)
        salt = salt if salt is not None else new_salt()

        state = GameState.fresh(config, self._choose_first_player(salt))
        changes = [f"{state.first_player.value} moves first"]

        if state.first_player is Player.AUTOMATED:
            state, amount = self._automated_turn(state, salt)
            changes.append(f"automated opening move removed {amount}")

        return ActionResult(new_state=state, state_changes=changes)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state and optional event.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            raise ValueError(f"No handler for action type: {action.action_type}")

        salt = action.payload.salt if action.payload.salt is not None else new_salt()
        return handler(state.clone(), action, salt)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.TURN: self._handle_turn,
            ActionType.GIVE_UP: self._handle_give_up,
            ActionType.RESTART: self._handle_restart,
        }
        return handlers.get(action_type)

    def _handle_turn(self, state: GameState, action: Action, salt: bytes) -> ActionResult:
        """Human move, then the automated reply unless the pile is empty."""
        # Finished games ignore further turns
        if state.is_over:
            return ActionResult(new_state=state, ignored=True)

        pebbles = action.payload.pebbles
        self._validate_turn(state, pebbles)

        state.remaining -= pebbles
        state.winner = state.winner_on_exhaustion()
        changes = [f"human removed {pebbles}, {state.remaining} left"]

        if state.winner is not None:
            changes.append(f"{state.winner.value} wins")
            return ActionResult(
                new_state=state,
                event=Event.won(state.winner),
                state_changes=changes,
            )

        state, amount = self._automated_turn(state, salt)
        changes.append(f"automated removed {amount}, {state.remaining} left")
        if state.winner is not None:
            changes.append(f"{state.winner.value} wins")

        # A pile emptied by the reply is still reported as CounterTurn
        return ActionResult(
            new_state=state,
            event=Event.counter_turn(amount),
            state_changes=changes,
        )

    def _handle_give_up(self, state: GameState, action: Action, salt: bytes) -> ActionResult:
        """Concede; overwrites any earlier winner."""
        state.winner = Player.AUTOMATED
        return ActionResult(
            new_state=state,
            event=Event.won(Player.AUTOMATED),
            state_changes=["human gave up"],
        )

    def _handle_restart(self, state: GameState, action: Action, salt: bytes) -> ActionResult:
        """
        Replace the game with a fresh one.

        Unlike start(), an automated first player does not move here.
        """
        config = action.payload.config
        if config is None:
            raise MalformedInputError("restart requires a config", field="config")
        validate_config(config)

        new_state = GameState.fresh(config, self._choose_first_player(salt))
        return ActionResult(
            new_state=new_state,
            state_changes=[f"restarted, {new_state.first_player.value} moves first"],
        )

    def _validate_turn(self, state: GameState, pebbles: int | None) -> None:
        if pebbles is None:
            raise MalformedInputError("turn requires a pebble count", field="pebbles")
        if pebbles < 1 or pebbles > state.max_per_turn:
            raise MalformedInputError(
                f"must remove between 1 and {state.max_per_turn} pebbles, got {pebbles}",
                field="pebbles",
                value=pebbles,
            )
        if pebbles > state.remaining:
            raise MalformedInputError(
                f"only {state.remaining} pebbles remaining, got {pebbles}",
                field="pebbles",
                value=pebbles,
            )

    def _choose_first_player(self, salt: bytes) -> Player:
        if self.entropy.draw(salt) % 2 == 0:
            return Player.HUMAN
        return Player.AUTOMATED

    def _automated_turn(self, state: GameState, salt: bytes) -> tuple[GameState, int]:
        """
        Let the policy move and evaluate termination.

        The amount is saturated at the pile size.
        """
        from ..bots.policy import policy_for

        policy = policy_for(state.difficulty, self.entropy)
        decision = policy.select_move(state.max_per_turn, state.remaining, salt)
        amount = min(decision.amount, state.remaining)
        log.debug(
            "%s chose %d (%s), applying %d of %d",
            policy.get_name(), decision.amount, decision.explanation, amount, state.remaining,
        )

        state.remaining -= amount
        state.winner = state.winner_on_exhaustion()
        return state, amount


def apply_action(
    state: GameState,
    action: Action,
    entropy: EntropySource | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(entropy=entropy or SystemEntropy())
    return reducer.apply(state, action)
