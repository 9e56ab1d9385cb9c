"""
Five-Card Draw Game Engine - State Machine Implementation.

This module implements the round/betting state machine for a heads-up game
between the human (seat 0) and The Ancient One (seat 1). It handles:
- Ante collection and dealing
- Pre-draw and post-draw betting rounds (check, call, bet, raise, fold)
- The single discard round
- Showdown and pot redistribution
- Game over when the human's sanity runs out
- The ESP side minigame between hands

Every operation returns an ActionResult. A rejected operation leaves the
state untouched; the only exception is an ante the human cannot afford,
which ends the game.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any, Iterable
from dataclasses import dataclass
import logging
import random

from cardshoggoths.agents.base import BaseAgent
from cardshoggoths.agents.shoggoth import ShoggothAgent
from cardshoggoths.config import GameConfig
from cardshoggoths.core.card import Deck
from cardshoggoths.core.esp import ESPState, ESP_THEME_MESSAGES, deal_esp
from cardshoggoths.core.hand import HandResult, describe_showdown
from cardshoggoths.core.player import Player, RoundState
from cardshoggoths.core.rules import (
    GamePhase, ActionType,
    BETTING_PHASES, IN_HAND_PHASES, ESP_ENTRY_PHASES,
    HUMAN_SEAT, AI_SEAT, HUMAN_NAME, AI_NAME, TIE,
    HAND_SIZE, ESP_REWARD, ESP_PENALTY,
    betting_round_closed, parse_action, parse_phase,
)


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a game operation."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


class GameState:
    """
    One game session: two players, their round states, the deck and the pot.

    Usage:
        game = new_game()
        game.collect_ante(10)

        result = game.player_action("check")
        game.opponent_turn()
        ...
        game.perform_discard([0, 3])
        ...
        game.new_round()

    The AI agent and the random source are collaborators supplied by the
    host; neither is part of the saved state.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        agent: Optional[BaseAgent] = None,
        rng: Optional[random.Random] = None,
        game_id: str = "",
    ):
        """
        Initialize a fresh game with both players at full sanity.

        Args:
            config: Table settings
            agent: Opponent decision maker (a default ShoggothAgent if omitted)
            rng: Random source for shuffling and ESP deals
            game_id: Session identifier, stored with the game
        """
        self.config = config or GameConfig()
        self.agent = agent or ShoggothAgent()
        self.rng = rng or random.Random()

        self.id = game_id
        self.players: List[Player] = [
            Player(name=HUMAN_NAME, is_ai=False, sanity=self.config.starting_sanity),
            Player(name=AI_NAME, is_ai=True, sanity=self.config.starting_sanity),
        ]
        self.round_states: List[RoundState] = [RoundState(), RoundState()]
        self.deck = Deck(rng=self.rng)

        self.pot = 0
        self.turn_index = HUMAN_SEAT
        self.phase = GamePhase.ANTE
        self.current_bet = 0
        self.last_action = "Game started. Ante up!"
        self.winner = ""
        self.reveal_on_fold = self.config.reveal_on_fold
        self.esp: Optional[ESPState] = None

    # ------------------------------------------------------------------
    # Accessors

    @property
    def human(self) -> Player:
        return self.players[HUMAN_SEAT]

    @property
    def opponent(self) -> Player:
        return self.players[AI_SEAT]

    @property
    def total_chips(self) -> int:
        """Pot plus both stacks; constant through betting and showdown."""
        return self.pot + sum(p.sanity for p in self.players)

    def amount_to_call(self, seat: int) -> int:
        """Chips the seat must add to match the current bet."""
        return max(0, self.current_bet - self.round_states[seat].bet)

    def is_hand_running(self) -> bool:
        return self.phase in IN_HAND_PHASES or self.phase == GamePhase.SHOWDOWN

    def can_discard(self) -> bool:
        return self.phase == GamePhase.DISCARD

    def can_showdown(self) -> bool:
        return self.phase in (GamePhase.SHOWDOWN, GamePhase.COMPLETE)

    def can_start_esp(self) -> bool:
        return self.phase in ESP_ENTRY_PHASES

    # ------------------------------------------------------------------
    # Round lifecycle

    def collect_ante(self, amount: Optional[int] = None) -> ActionResult:
        """
        Collect the ante from both players and deal the hands.

        Only valid in the ANTE phase. If the human cannot pay, the game is
        over. If the AI cannot pay, it regenerates to full sanity first.
        """
        if amount is None:
            amount = self.config.ante
        if self.phase != GamePhase.ANTE:
            return ActionResult(False, "The ante has already been collected.")
        if amount < 0:
            return ActionResult(False, "Ante cannot be negative.")

        if not self.human.can_afford(amount):
            self.phase = GamePhase.GAME_OVER
            self.last_action = (
                f"{self.human.name} has insufficient sanity for ante. Game Over."
            )
            logger.info(f"Game {self.id or '-'} over: human cannot pay ante of {amount}")
            return ActionResult(False, self.last_action)

        regenerated = False
        if not self.opponent.can_afford(amount):
            self.opponent.sanity = self.config.starting_sanity
            regenerated = True
            logger.info(f"{self.opponent.name} regenerates to {self.opponent.sanity}")

        for player in self.players:
            player.pay(amount)
            self.pot += amount

        for state in self.round_states:
            state.reset(self.deck.deal(HAND_SIZE))

        self.phase = GamePhase.PRE_DRAW_BETTING
        self.current_bet = 0
        self.turn_index = HUMAN_SEAT
        self.last_action = f"Ante paid: {amount}"
        if regenerated:
            self.last_action = f"{self.opponent.name} regenerates its form! {self.last_action}"

        logger.info(f"Game {self.id or '-'}: ante {amount} collected, pot {self.pot}")
        return ActionResult(True, self.last_action, amount=amount)

    def new_round(self) -> ActionResult:
        """
        Reset the per-round state for the next hand; sanity carries over.

        Allowed between hands only. After a game over the human's sanity must
        first be restored above zero.
        """
        if self.phase == GamePhase.GAME_OVER and self.human.sanity <= 0:
            return ActionResult(False, "Game over. Your sanity is spent.")
        if self.is_hand_running():
            return ActionResult(False, "Finish the current hand first.")

        self.deck = Deck(rng=self.rng)
        for state in self.round_states:
            state.reset()

        self.pot = 0
        self.turn_index = HUMAN_SEAT
        self.phase = GamePhase.ANTE
        self.current_bet = 0
        self.last_action = "New round started. Ante up!"
        self.winner = ""
        self.reveal_on_fold = self.config.reveal_on_fold
        self.esp = None
        return ActionResult(True, self.last_action)

    # ------------------------------------------------------------------
    # Betting

    def player_action(self, action, amount: int = 0) -> ActionResult:
        """
        Process the human's betting action.

        Args:
            action: ActionType or its name ("fold", "check", "call", "bet",
                "raise")
            amount: Bet size for BET, raise increment for RAISE

        Returns:
            ActionResult; on failure the message says why.
        """
        try:
            action_type = parse_action(action)
        except ValueError:
            return ActionResult(False, "Invalid action.")

        seat = HUMAN_SEAT
        player = self.human
        state = self.round_states[seat]

        # Folding is allowed out of turn
        if action_type == ActionType.FOLD:
            if self.phase not in IN_HAND_PHASES:
                return ActionResult(False, "There is no hand to fold.")
            self._end_by_fold(seat, f"You folded. {self.opponent.name} wins.")
            return ActionResult(True, self.last_action, ActionType.FOLD)

        if self.phase not in BETTING_PHASES or self.turn_index != seat:
            return ActionResult(False, "It is not your turn.")

        to_call = self.amount_to_call(seat)

        if action_type == ActionType.CHECK:
            if to_call > 0:
                return ActionResult(False, "Cannot check when there is a bet to call.")
            self.last_action = "You checked."
            self._finish_action(seat, ActionType.CHECK)
            return ActionResult(True, "Checked", ActionType.CHECK)

        if action_type == ActionType.CALL:
            if to_call <= 0:
                return ActionResult(False, "Nothing to call, please Check.")
            if not player.can_afford(to_call):
                return ActionResult(False, "Not enough sanity to call.")
            self._commit(seat, to_call)
            self.last_action = "You called."
            self._finish_action(seat, ActionType.CALL)
            return ActionResult(True, f"Called {to_call}", ActionType.CALL, to_call)

        # BET / RAISE
        if amount <= 0:
            return ActionResult(False, "Bet amount must be positive.")
        total_cost = to_call + amount
        if not player.can_afford(total_cost):
            return ActionResult(
                False,
                f"Not enough sanity. You need {total_cost} but have {player.sanity}.",
            )
        self._commit(seat, total_cost)
        self.current_bet = state.bet
        if action_type == ActionType.BET:
            self.last_action = f"You bet {amount}."
        else:
            self.last_action = f"You raised by {amount}."
        self._finish_action(seat, action_type)
        return ActionResult(True, self.last_action, action_type, total_cost)

    def opponent_turn(self) -> ActionResult:
        """
        Let the AI act if it holds the turn.

        The agent's choice is degraded when it is not feasible: a check
        facing a bet becomes a call, a bet or raise beyond its sanity becomes
        a call (or a check when nothing is owed), and a call it cannot afford
        becomes a fold.
        """
        seat = AI_SEAT
        if self.phase not in BETTING_PHASES or self.turn_index != seat:
            return ActionResult(False, "It is not the opponent's turn.")

        opponent = self.opponent
        state = self.round_states[seat]
        to_call = self.amount_to_call(seat)

        declared, amount = self.agent.decide_action(list(state.hand), self)
        action = self._feasible_opponent_action(declared, amount, to_call)
        if action != declared:
            logger.debug(f"{opponent.name} {declared.value} degraded to {action.value}")

        if action == ActionType.FOLD:
            if declared == ActionType.FOLD:
                message = f"{opponent.name} folds. You win!"
            else:
                message = f"{opponent.name} folds (insufficient sanity)."
            self._end_by_fold(seat, message)
            return ActionResult(True, self.last_action, ActionType.FOLD)

        if action == ActionType.CHECK:
            self.last_action = f"{opponent.name} checks."
            self._finish_action(seat, ActionType.CHECK)
            return ActionResult(True, self.last_action, ActionType.CHECK)

        if action == ActionType.CALL:
            self._commit(seat, to_call)
            self.last_action = f"{opponent.name} calls."
            self._finish_action(seat, ActionType.CALL)
            return ActionResult(True, self.last_action, ActionType.CALL, to_call)

        total_cost = to_call + amount
        self._commit(seat, total_cost)
        self.current_bet = state.bet
        if action == ActionType.BET:
            self.last_action = f"{opponent.name} bets {amount}."
        else:
            self.last_action = f"{opponent.name} raises by {amount}."
        self._finish_action(seat, action)
        return ActionResult(True, self.last_action, action, total_cost)

    def _feasible_opponent_action(
        self, action: ActionType, amount: int, to_call: int
    ) -> ActionType:
        """Map the agent's declared action onto one the AI can perform."""
        opponent = self.opponent
        if action in (ActionType.BET, ActionType.RAISE):
            if amount > 0 and opponent.can_afford(to_call + amount):
                return action
            action = ActionType.CALL
        if action == ActionType.CHECK and to_call > 0:
            action = ActionType.CALL
        if action == ActionType.CALL:
            if to_call == 0:
                return ActionType.CHECK
            if not opponent.can_afford(to_call):
                return ActionType.FOLD
        return action

    def _commit(self, seat: int, amount: int) -> None:
        """Move chips from a player into the pot."""
        self.players[seat].pay(amount)
        self.round_states[seat].bet += amount
        self.pot += amount

    def _finish_action(self, seat: int, action: ActionType) -> None:
        """Close the betting round or pass the turn."""
        bets = [state.bet for state in self.round_states]
        if betting_round_closed(self.phase, bets, seat, action):
            self._advance_phase()
        else:
            self.turn_index = 1 - seat

    def _end_by_fold(self, folder: int, message: str) -> None:
        """End the round; the other seat takes the whole pot."""
        winner = self.players[1 - folder]
        self.round_states[folder].folded = True
        winner.sanity += self.pot
        logger.info(f"Game {self.id or '-'}: {self.players[folder].name} folded, "
                    f"{winner.name} takes {self.pot}")
        self.pot = 0
        self.winner = winner.name
        self.phase = GamePhase.COMPLETE
        self.last_action = message

    def _advance_phase(self) -> None:
        """Move to the next phase after a betting or discard round closes."""
        if self.phase == GamePhase.PRE_DRAW_BETTING:
            self.phase = GamePhase.DISCARD
            self.turn_index = HUMAN_SEAT
            self.current_bet = 0
            for state in self.round_states:
                state.bet = 0
            self.last_action = f"{self.last_action} Betting complete. Choose cards to discard."
        elif self.phase == GamePhase.DISCARD:
            self.phase = GamePhase.POST_DRAW_BETTING
            self.turn_index = HUMAN_SEAT
            self.last_action = f"{self.last_action} Final betting round."
        elif self.phase == GamePhase.POST_DRAW_BETTING:
            self.phase = GamePhase.SHOWDOWN
            self.complete_showdown()
            return
        logger.info(f"Game {self.id or '-'} -> {self.phase.value}")

    # ------------------------------------------------------------------
    # Draw and showdown

    def perform_discard(self, indices: Iterable[int]) -> ActionResult:
        """
        Exchange the human's chosen cards, then let the AI exchange its own.

        Both exchanges happen in this one call, after which post-draw betting
        begins.

        Args:
            indices: Distinct positions 0-4 in the human's hand
        """
        if self.phase != GamePhase.DISCARD:
            return ActionResult(False, "Cannot discard now.")

        indices = list(indices)
        if not _valid_discard(indices):
            return ActionResult(False, "Invalid discard indices.")

        human_state = self.round_states[HUMAN_SEAT]
        ai_state = self.round_states[AI_SEAT]

        self.deck.replace_cards(human_state.hand, indices)
        human_state.discarded = True

        ai_indices = self.agent.choose_discard(list(ai_state.hand))
        self.deck.replace_cards(ai_state.hand, ai_indices)
        ai_state.discarded = True

        self.last_action = (
            f"Cards exchanged. You drew {len(indices)}, "
            f"{self.opponent.name} drew {len(ai_indices)}."
        )
        self._advance_phase()
        return ActionResult(True, self.last_action, amount=len(indices))

    def complete_showdown(self) -> ActionResult:
        """
        Compare hands and redistribute the pot.

        The winner takes the pot; a tie splits it, the odd chip going to the
        human's seat. A completed round returns its recorded result again.
        """
        if self.phase == GamePhase.COMPLETE:
            return ActionResult(True, self.last_action)
        if self.phase != GamePhase.SHOWDOWN:
            return ActionResult(False, "Cannot showdown now.")

        human, opponent = self.human, self.opponent
        result, message = describe_showdown(
            self.round_states[HUMAN_SEAT].hand,
            self.round_states[AI_SEAT].hand,
            opponent.name,
        )

        pot = self.pot
        if result == HandResult.HAND1_WINS:
            human.sanity += pot
            self.winner = human.name
        elif result == HandResult.HAND2_WINS:
            opponent.sanity += pot
            self.winner = opponent.name
        else:
            half = pot // 2
            human.sanity += pot - half
            opponent.sanity += half
            self.winner = TIE
        self.pot = 0

        self.phase = GamePhase.COMPLETE
        self.last_action = message
        logger.info(f"Game {self.id or '-'} showdown: {message} (pot {pot})")

        if human.sanity <= 0:
            self.phase = GamePhase.GAME_OVER
            self.last_action = f"{message} You lost everything. Game Over."
            logger.info(f"Game {self.id or '-'} over after showdown")

        return ActionResult(True, self.last_action, amount=pot)

    # ------------------------------------------------------------------
    # ESP minigame

    def start_esp(self) -> ActionResult:
        """Start an ESP round between hands."""
        if not self.can_start_esp():
            return ActionResult(False, "The spirits are occupied. Complete your current hand first.")

        self.esp = deal_esp(self.rng)
        self.phase = GamePhase.ESP
        self.last_action = f"{ESP_THEME_MESSAGES[self.esp.theme]} Find the matching cards!"
        return ActionResult(True, self.last_action)

    def guess_esp(self, index1: int, index2: int) -> ActionResult:
        """
        Guess one card from each row.

        Returns:
            ActionResult whose amount is the sanity change (+reward, or
            -penalty capped at the sanity left).
        """
        if self.esp is None or self.phase != GamePhase.ESP:
            return ActionResult(False, "Not in ESP mode")
        if not (0 <= index1 < len(self.esp.hand1) and 0 <= index2 < len(self.esp.hand2)):
            return ActionResult(False, "Invalid card selection")

        self.esp.attempts += 1

        if self.esp.is_match(index1, index2):
            self.human.sanity += ESP_REWARD
            self.phase = GamePhase.COMPLETE
            self.esp = None
            self.last_action = f"Your mind pierces the veil! +{ESP_REWARD} Sanity"
            return ActionResult(True, self.last_action, amount=ESP_REWARD)

        # Sanity never goes below zero
        penalty = min(ESP_PENALTY, max(self.human.sanity, 0))
        self.human.pay(penalty)
        if self.human.sanity <= 0:
            self.phase = GamePhase.GAME_OVER
            self.esp = None
            self.last_action = "The visions consumed you. Game Over."
        else:
            self.last_action = f"The cards blur... -{penalty} Sanity. Try again."
        return ActionResult(True, self.last_action, amount=-penalty)

    def exit_esp(self) -> ActionResult:
        """Leave the ESP minigame early."""
        if self.phase != GamePhase.ESP:
            return ActionResult(False, "Not in ESP mode")
        self.phase = GamePhase.COMPLETE
        self.esp = None
        self.last_action = "You close your third eye."
        return ActionResult(True, self.last_action)

    # ------------------------------------------------------------------
    # Views and persistence

    def get_legal_actions(self) -> List[str]:
        """Betting actions the human may take right now."""
        if self.phase not in IN_HAND_PHASES:
            return []
        actions = [ActionType.FOLD.value]
        if self.phase not in BETTING_PHASES or self.turn_index != HUMAN_SEAT:
            return actions

        to_call = self.amount_to_call(HUMAN_SEAT)
        if to_call == 0:
            actions.append(ActionType.CHECK.value)
            if self.human.sanity > 0:
                actions.append(ActionType.BET.value)
        else:
            if self.human.can_afford(to_call):
                actions.append(ActionType.CALL.value)
            if self.human.sanity > to_call:
                actions.append(ActionType.RAISE.value)
        return actions

    def opponent_hand_visible(self) -> bool:
        """The AI's cards are shown after a showdown, or after a fold if enabled."""
        if self.phase not in (GamePhase.COMPLETE, GamePhase.GAME_OVER):
            return False
        if not self.round_states[AI_SEAT].hand:
            return False
        folded = any(state.folded for state in self.round_states)
        return self.reveal_on_fold or not folded

    def get_state(self) -> Dict[str, Any]:
        """
        Get the game state as seen by the human.

        Returns:
            Dict with public_info (table) and private_info (the human's hand,
            legal actions, and the opponent's hand when revealed).
        """
        public_info = {
            "phase": self.phase.value,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "turn": "player" if self.turn_index == HUMAN_SEAT else "opponent",
            "last_action": self.last_action,
            "winner": self.winner,
            "players": [
                {**p.to_dict(), **s.to_dict(hide_cards=True)}
                for p, s in zip(self.players, self.round_states)
            ],
            "deck_remaining": self.deck.remaining,
        }

        human_state = self.round_states[HUMAN_SEAT]
        private_info = {
            "hand": [c.to_dict() for c in human_state.hand],
            "amount_to_call": self.amount_to_call(HUMAN_SEAT),
            "available_moves": self.get_legal_actions(),
            "can_discard": self.can_discard(),
            "can_showdown": self.can_showdown(),
            "can_start_esp": self.can_start_esp(),
            "opponent_hand": None,
            "esp": self.esp.to_public_dict() if self.esp else None,
        }
        if self.opponent_hand_visible():
            private_info["opponent_hand"] = [
                c.to_dict() for c in self.round_states[AI_SEAT].hand
            ]

        return {
            "public_info": public_info,
            "private_info": private_info,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Flat, JSON-compatible snapshot of the whole game."""
        return {
            "id": self.id,
            "deck": [card.to_dict() for card in self.deck.cards],
            "players": [p.to_dict() for p in self.players],
            "round_states": [s.to_dict() for s in self.round_states],
            "pot": self.pot,
            "turn_index": self.turn_index,
            "game_phase": self.phase.value,
            "current_bet": self.current_bet,
            "last_action": self.last_action,
            "winner": self.winner,
            "reveal_on_fold": self.reveal_on_fold,
            "esp": self.esp.to_dict() if self.esp else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        config: Optional[GameConfig] = None,
        agent: Optional[BaseAgent] = None,
        rng: Optional[random.Random] = None,
    ) -> GameState:
        """
        Rebuild a game from to_dict() output.

        Legacy phase spellings are accepted.
        """
        game = cls(config=config, agent=agent, rng=rng, game_id=data.get("id", ""))
        game.deck = Deck.from_list(data["deck"], rng=game.rng)
        game.players = [Player.from_dict(p) for p in data["players"]]
        game.round_states = [RoundState.from_dict(s) for s in data["round_states"]]
        game.pot = data["pot"]
        game.turn_index = data["turn_index"]
        game.phase = parse_phase(data["game_phase"])
        game.current_bet = data["current_bet"]
        game.last_action = data.get("last_action", "")
        game.winner = data.get("winner", "")
        game.reveal_on_fold = data.get("reveal_on_fold", game.config.reveal_on_fold)
        esp = data.get("esp")
        game.esp = ESPState.from_dict(esp) if esp else None
        return game

    def __repr__(self) -> str:
        return (
            f"GameState({self.phase.value}, pot={self.pot}, "
            f"sanity={[p.sanity for p in self.players]})"
        )


def _valid_discard(indices: List[Any]) -> bool:
    """Distinct integer positions within a hand."""
    if not all(
        isinstance(i, int) and not isinstance(i, bool) and 0 <= i < HAND_SIZE
        for i in indices
    ):
        return False
    return len(set(indices)) == len(indices)


def new_game(
    config: Optional[GameConfig] = None,
    agent: Optional[BaseAgent] = None,
    rng: Optional[random.Random] = None,
    game_id: str = "",
) -> GameState:
    """Create a fresh session with both players at full sanity."""
    return GameState(config=config, agent=agent, rng=rng, game_id=game_id)
