"""
Texas Hold'em Betting Engine - Functional State Machine.

A hand is a GameState value. start_hand() builds the first one; apply()
takes a state and an action and returns the next state, leaving its input
untouched. Callers keep the latest value and pass it into the next call.

It handles:
- Dealer button rotation and blind posting (heads-up special rule)
- Legal action menus (fold, check, call, bet, raise)
- Street progression: pre-flop, flop, turn, river, showdown
- Running the board out when nobody is left to bet
- Showdown with split pots (odd chips to the first winner in seat order)

All chips go into a single pot. Side pots for uneven all-ins are not split;
`side_pots` is kept as an always-empty placeholder.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Set, Any, Sequence, Union
from dataclasses import dataclass, field
import copy
import logging
import random

from pokeradvisor.core.card import Card, Deck, new_deck
from pokeradvisor.core.player import Player
from pokeradvisor.core.hand import HandEvaluation, evaluate_best
from pokeradvisor.core.exceptions import (
    IllegalActionError, InvariantViolation, HandStateError,
)
from pokeradvisor.core.rules import (
    Street, ActionType, BlindStructure,
    get_blind_positions, calculate_min_raise, next_seat, validate_table_size,
    DEFAULT_BLINDS, HOLE_CARDS, TOTAL_COMMUNITY_CARDS, STREET_PROGRESSION,
)


logger = logging.getLogger(__name__)


@dataclass
class ActionRecord:
    """One entry of the chronological action log."""
    player_id: str
    action_type: ActionType
    amount: int  # Chips put in by this action
    street: Street
    is_all_in: bool = False
    is_blind: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "action": self.action_type.value,
            "amount": self.amount,
            "street": self.street.value,
            "all_in": self.is_all_in,
            "blind": self.is_blind,
        }


@dataclass(frozen=True)
class LegalAction:
    """
    An action the player to act may take, with its amount bounds.

    Amounts are chips put in by the action itself. CALL has equal bounds;
    FOLD and CHECK have zero bounds.
    """
    action_type: ActionType
    min_amount: int = 0
    max_amount: int = 0

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.action_type.value}
        if self.action_type == ActionType.CALL:
            result["amount"] = self.min_amount
        elif self.action_type.is_aggressive:
            result["min"] = self.min_amount
            result["max"] = self.max_amount
        return result


@dataclass
class GameState:
    """
    Everything about one hand in progress.

    Attributes:
        players: Seated players, in fixed seat order
        deck: Undealt cards
        blinds: Blind amounts for this hand
        hand_number: Sequence number of the hand at this table
        community_cards: Board cards (0-5)
        pot: Chips contributed this hand; once the hand is over it is the
            amount that was awarded
        side_pots: Placeholder, never populated
        street: Current street
        current_player_index: Seat of the player to act
        min_bet: Minimum opening bet on a street
        last_raise_amount: Size of the last bet or raise increment this street
        big_blind_option: The big blind has not yet acted voluntarily
            pre-flop, so the round stays open for them
        hand_over: The hand is finished and the pot awarded
        winners: Player ids that won the pot, in seat order
        payouts: Chips awarded to each winner
        hand_evaluations: Best hands of the showdown contenders
        action_log: Every action of the hand, blinds included
        acted: Seats that have acted this street
        revealed: Player ids whose hole cards are public
    """
    players: List[Player]
    deck: Deck
    blinds: BlindStructure = DEFAULT_BLINDS
    hand_number: int = 1
    community_cards: List[Card] = field(default_factory=list)
    pot: int = 0
    side_pots: List[Dict[str, Any]] = field(default_factory=list)
    street: Street = Street.PRE_FLOP
    current_player_index: int = 0
    dealer_index: int = 0
    small_blind_index: int = 0
    big_blind_index: int = 0
    min_bet: int = 0
    last_raise_amount: int = 0
    big_blind_option: bool = False
    hand_over: bool = False
    winners: List[str] = field(default_factory=list)
    payouts: Dict[str, int] = field(default_factory=dict)
    hand_evaluations: Dict[str, HandEvaluation] = field(default_factory=dict)
    action_log: List[ActionRecord] = field(default_factory=list)
    acted: Set[int] = field(default_factory=set)
    revealed: Set[str] = field(default_factory=set)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def small_blind_amount(self) -> int:
        return self.blinds.small_blind

    @property
    def big_blind_amount(self) -> int:
        return self.blinds.big_blind

    def clone(self) -> GameState:
        """Independent copy; cards are immutable and shared."""
        return copy.deepcopy(self)

    def player_by_id(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def is_revealed(self, player: Player) -> bool:
        """Hole cards are public once shown down."""
        return player.player_id in self.revealed


def start_hand(
    players: Sequence[Player],
    blinds: Optional[BlindStructure] = None,
    previous: Optional[GameState] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Start a new hand.

    The players are copied, so the caller's objects are left alone; chips
    and identity carry over, everything else is reset.

    Args:
        players: Seated players in seat order
        blinds: Blind amounts; defaults to the previous hand's, then 5/10
        previous: The previous hand at this table, for button rotation
        rng: Uniform random source for the shuffle

    Raises:
        ValueError: If the number of players with chips cannot be dealt
    """
    if blinds is None:
        blinds = previous.blinds if previous is not None else DEFAULT_BLINDS

    seated = copy.deepcopy(list(players))
    for player in seated:
        player.reset_for_new_hand()

    active_seats = [i for i, p in enumerate(seated) if p.active]
    validate_table_size(len(active_seats))

    # Move the button to the next player with chips
    previous_dealer = previous.dealer_index if previous is not None else -1
    dealer = next_seat(len(seated), previous_dealer, lambda i: seated[i].active)
    small_blind, big_blind = get_blind_positions(active_seats, dealer)

    seated[dealer].is_dealer = True
    seated[small_blind].is_small_blind = True
    seated[big_blind].is_big_blind = True

    state = GameState(
        players=seated,
        deck=new_deck(rng),
        blinds=blinds,
        hand_number=previous.hand_number + 1 if previous is not None else 1,
        dealer_index=dealer,
        small_blind_index=small_blind,
        big_blind_index=big_blind,
        min_bet=blinds.big_blind,
        last_raise_amount=blinds.big_blind,
    )

    logger.info(
        f"Starting hand #{state.hand_number}: dealer={dealer} "
        f"sb={small_blind} bb={big_blind}"
    )

    _deal_hole_cards(state)
    _post_blind(state, small_blind, blinds.small_blind)
    _post_blind(state, big_blind, blinds.big_blind)
    state.acted = {small_blind, big_blind}
    state.big_blind_option = seated[big_blind].can_act

    if _is_round_complete(state):
        # Blinds put everyone but one all-in
        _advance_street(state)
    else:
        first = next_seat(state.num_players, big_blind, lambda i: seated[i].can_act)
        if first is None:
            raise InvariantViolation("No player can act after the blinds")
        state.current_player_index = first

    return state


def _deal_hole_cards(state: GameState) -> None:
    """Deal 2 hole cards to each active player."""
    for player in state.players:
        if player.active:
            player.deal_cards(state.deck.deal(HOLE_CARDS))


def _post_blind(state: GameState, seat: int, amount: int) -> None:
    """Post a blind, capped at the player's stack."""
    player = state.players[seat]
    posted = player.commit(amount)
    state.pot += posted
    state.action_log.append(ActionRecord(
        player_id=player.player_id,
        action_type=ActionType.BET,
        amount=posted,
        street=state.street,
        is_all_in=player.all_in,
        is_blind=True,
    ))
    logger.debug(f"{player.name} posts blind {posted}")


def current_player(state: GameState) -> Optional[Player]:
    """The player whose turn it is to act, or None once the hand is over."""
    if state.hand_over:
        return None
    return state.players[state.current_player_index]


def highest_bet(state: GameState) -> int:
    """Highest current-street bet across all players."""
    return max(p.bet for p in state.players)


def eligible_players(state: GameState) -> List[Player]:
    """Players that can still take betting actions."""
    return [p for p in state.players if p.can_act]


def legal_actions(state: GameState) -> List[LegalAction]:
    """
    Get the legal actions for the player to act.

    Returns:
        List of LegalAction; empty when the hand is over or the player to
        act has folded, is all-in, or is not in the hand
    """
    player = current_player(state)
    if player is None or not player.can_act:
        return []

    highest = highest_bet(state)
    deficit = highest - player.bet

    actions = [LegalAction(ActionType.FOLD)]

    if deficit == 0:
        actions.append(LegalAction(ActionType.CHECK))

    if deficit > 0 and player.chips > 0:
        call_amount = min(deficit, player.chips)
        actions.append(LegalAction(ActionType.CALL, call_amount, call_amount))

    if highest == 0 and player.chips > 0:
        actions.append(LegalAction(
            ActionType.BET,
            min(state.min_bet, player.chips),
            player.chips,
        ))

    if highest > 0 and player.chips > deficit:
        min_raise = calculate_min_raise(deficit, state.last_raise_amount)
        if player.chips >= min_raise:
            actions.append(LegalAction(ActionType.RAISE, min_raise, player.chips))

    return actions


def find_legal_action(
    state: GameState,
    action_type: ActionType,
) -> Optional[LegalAction]:
    for action in legal_actions(state):
        if action.action_type == action_type:
            return action
    return None


def default_action(state: GameState) -> ActionType:
    """
    The action taken for a player who does not respond: check when free,
    otherwise fold.
    """
    actions = [a.action_type for a in legal_actions(state)]
    if not actions:
        raise HandStateError("No player is waiting to act")
    return ActionType.CHECK if ActionType.CHECK in actions else ActionType.FOLD


def apply(
    state: GameState,
    action_type: Union[ActionType, str],
    amount: Optional[int] = None,
) -> GameState:
    """
    Process an action by the player to act.

    Args:
        state: Current hand state (not modified)
        action_type: FOLD, CHECK, CALL, BET or RAISE
        amount: Chips to put in for BET/RAISE; clamped to the legal range
            and defaulting to the minimum. Ignored for other actions.

    Returns:
        The next GameState

    Raises:
        IllegalActionError: If the action is not currently legal or the
            amount is not a number
        HandStateError: If the hand is already over
    """
    if state.hand_over:
        raise HandStateError("No hand in progress")

    action_type = _coerce_action_type(action_type)
    option = find_legal_action(state, action_type)
    if option is None:
        player = state.players[state.current_player_index]
        raise IllegalActionError(
            f"{player.name} cannot {action_type.value} "
            f"(bet {player.bet}, highest {highest_bet(state)}, chips {player.chips})"
        )
    if action_type.is_aggressive:
        amount = _clamp_amount(option, amount)

    new_state = state.clone()
    seat = new_state.current_player_index
    player = new_state.players[seat]
    prior_highest = highest_bet(new_state)
    put_in = 0

    if action_type == ActionType.FOLD:
        player.fold()
    elif action_type == ActionType.CALL:
        put_in = player.commit(option.min_amount)
    elif action_type.is_aggressive:
        put_in = player.commit(amount)
        increment = player.bet - prior_highest
        if increment > 0:
            new_state.last_raise_amount = increment

    new_state.pot += put_in
    new_state.action_log.append(ActionRecord(
        player_id=player.player_id,
        action_type=action_type,
        amount=put_in,
        street=new_state.street,
        is_all_in=player.all_in,
    ))
    new_state.acted.add(seat)
    if seat == new_state.big_blind_index:
        new_state.big_blind_option = False

    logger.debug(f"{player.name} {action_type.value} {put_in} (pot {new_state.pot})")

    contenders = [p for p in new_state.players if p.is_in_hand]
    if len(contenders) == 1:
        _award_uncontested(new_state, contenders[0])
        return new_state

    if _is_round_complete(new_state):
        _advance_street(new_state)
        return new_state

    next_to_act = next_seat(
        new_state.num_players, seat, lambda i: new_state.players[i].can_act
    )
    if next_to_act is None:
        _advance_street(new_state)
    else:
        new_state.current_player_index = next_to_act

    return new_state


def _coerce_action_type(action_type: Union[ActionType, str]) -> ActionType:
    if isinstance(action_type, ActionType):
        return action_type
    try:
        return ActionType(str(action_type).lower())
    except ValueError:
        raise IllegalActionError(f"Unknown action: {action_type}") from None


def _clamp_amount(option: LegalAction, amount: Optional[int]) -> int:
    """Clamp a bet/raise amount into the legal range."""
    if amount is None:
        return option.min_amount
    try:
        requested = int(amount)
    except (TypeError, ValueError):
        raise IllegalActionError(f"Invalid amount: {amount!r}") from None
    clamped = min(max(requested, option.min_amount), option.max_amount)
    if clamped != requested:
        logger.warning(
            f"{option.action_type.value} amount {amount} clamped to {clamped} "
            f"(range {option.min_amount}-{option.max_amount})"
        )
    return clamped


def _is_round_complete(state: GameState) -> bool:
    """
    Every player who can still bet has acted this street and matched the
    highest bet. Vacuously true when nobody can bet.
    """
    if state.big_blind_option:
        return False
    highest = highest_bet(state)
    for seat, player in enumerate(state.players):
        if not player.can_act:
            continue
        if seat not in state.acted or player.bet != highest:
            return False
    return True


def _advance_street(state: GameState) -> None:
    """Close the betting round and move to the next street or showdown."""
    for player in state.players:
        player.reset_for_new_street()
    state.acted = set()
    state.big_blind_option = False
    state.last_raise_amount = state.big_blind_amount

    if state.street == Street.RIVER:
        _resolve_showdown(state)
        return

    next_street, num_cards = STREET_PROGRESSION[state.street]
    state.community_cards.extend(state.deck.deal(num_cards))
    state.street = next_street
    logger.info(
        f"Hand #{state.hand_number} {state.street.value}: "
        f"{' '.join(str(c) for c in state.community_cards)}"
    )

    if len(eligible_players(state)) <= 1:
        # Nobody left to bet against: deal the rest and show down
        _run_out_board(state)
        _resolve_showdown(state)
        return

    first = next_seat(
        state.num_players, state.dealer_index, lambda i: state.players[i].can_act
    )
    state.current_player_index = first


def _run_out_board(state: GameState) -> None:
    """Deal remaining community cards when going directly to showdown."""
    missing = TOTAL_COMMUNITY_CARDS - len(state.community_cards)
    if missing > 0:
        state.community_cards.extend(state.deck.deal(missing))
    state.street = Street.RIVER


def _resolve_showdown(state: GameState) -> None:
    """Evaluate every contender, reveal them and split the pot."""
    state.street = Street.SHOWDOWN

    contenders = [p for p in state.players if p.is_in_hand]
    if not contenders:
        raise InvariantViolation("Showdown with no players in the hand")

    for player in contenders:
        state.hand_evaluations[player.player_id] = evaluate_best(
            player.hole_cards, state.community_cards
        )
        state.revealed.add(player.player_id)

    best_value = max(state.hand_evaluations[p.player_id].value for p in contenders)
    winners = [
        p for p in contenders
        if state.hand_evaluations[p.player_id].value == best_value
    ]

    share, remainder = divmod(state.pot, len(winners))
    payouts = {p.player_id: share for p in winners}
    payouts[winners[0].player_id] += remainder

    for player in winners:
        player.chips += payouts[player.player_id]

    state.winners = [p.player_id for p in winners]
    state.payouts = payouts
    state.hand_over = True

    logger.info(
        f"Hand #{state.hand_number} showdown: "
        + ", ".join(
            f"{p.name} wins {payouts[p.player_id]} with "
            f"{state.hand_evaluations[p.player_id].description}"
            for p in winners
        )
    )


def _award_uncontested(state: GameState, winner: Player) -> None:
    """End the hand when only one player remains."""
    winner.chips += state.pot
    state.winners = [winner.player_id]
    state.payouts = {winner.player_id: state.pot}
    state.street = Street.SHOWDOWN
    state.hand_over = True

    logger.info(f"Hand #{state.hand_number}: {winner.name} wins {state.pot} uncontested")
