# Area: Oracle
"""
poker_bot._oracle.prompts - Prompt builders
===========================================

Builds the system and user messages for the two oracle call sites.
"""

from typing import Optional, Sequence

NULL_SENTINEL = "null"
CHAT_MAX_CHARS = 40

# Present in every action prompt; lets canned oracles tell the call sites apart
ACTION_FORMAT_MARKER = "Your response should be a JSON object"

GAME_NAMES = {
    "HOLDEM": "Texas hold 'em",
    "FIVE_CARD_DRAW": "Five-card draw",
}


def game_name(game: str) -> str:
    """Human-readable game name, empty for unknown variants."""
    return GAME_NAMES.get(game, "")


def _cards(cards: Sequence[str]) -> str:
    return ", ".join(cards) if cards else "none"


def build_action_prompt(
    player_cards: Sequence[str],
    middle_cards: Sequence[str],
    current_status: str,
    highest_total_bet: float,
    game: str = "HOLDEM",
) -> str:
    """System message for an action decision."""
    instruction = (
        f"You are playing at a {game_name(game) or 'poker'} table. "
        "Your task is to determine the next action to proceed. "
        f"{ACTION_FORMAT_MARKER} in the following format:\n"
        "{\n"
        '  "action": "RAISE" | "CALL" | "CHECK" | "FOLD",\n'
        '  "amount": <number>, // Only for RAISE, otherwise null or omitted\n'
        '  "reason": <string> // Small explanation of why this action was chosen\n'
        "}"
    )
    cards = (
        f"You have {_cards(player_cards)} as hole cards, "
        f"and the current middle cards are {_cards(middle_cards)}."
    )
    status = (
        f"The game's current status is {current_status or 'unknown'}. "
        f"The highest total bet so far is {highest_total_bet}."
    )
    limits = (
        "You can only choose from these actions: RAISE, CALL, CHECK, or FOLD. "
        "Use FOLD only in rare cases."
    )
    return f"{instruction} {cards} {status} {limits}"


ACTION_USER_PROMPT = "What is your action?"


def build_chat_prompt(
    game: str,
    player_name: str,
    player_cards: Sequence[str],
    middle_cards: Sequence[str],
    sender_name: str,
    current_status: Optional[str] = None,
    current_turn_text: Optional[str] = None,
) -> str:
    """System message for a chat reply."""
    persona = (
        f"You are a rude but humorous bot in a {game_name(game) or 'poker'} table "
        f"and your name is {player_name}."
    )
    chat = f"You are part of public chat where user called {sender_name} sent a message."
    cards = (
        f"You have {_cards(player_cards)} cards and middle cards {_cards(middle_cards)} "
        "and you use this information for bluffing reasons."
    )
    parts = [persona, chat, cards]
    if current_status or current_turn_text:
        context = "The table is currently"
        if current_status:
            context += f" at {current_status}"
        if current_turn_text:
            context += f" ({current_turn_text})"
        parts.append(context + ".")
    parts.append(f"Keep answer under {CHAT_MAX_CHARS} characters.")
    parts.append(
        f"If the message does not deserve a reply, answer with {NULL_SENTINEL} and nothing else."
    )
    return " ".join(parts)
