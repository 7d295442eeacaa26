"""
main.py - Run your Poker Bot
============================

This is the entry point. Fill in the server and oracle settings
(or put them in a .env file) and run.

    python main.py

The runner will:
  1. Connect to the poker server and log in
  2. Join the requested table, or the first suitable one
  3. Ask the model for an action whenever it is your turn
  4. Answer table chat when the model has something to say

Press Ctrl+C to stop.
"""

import sys

from dotenv import load_dotenv

from poker_bot import BotRunner

load_dotenv()

# ── Configuration ──
config = {
    # Game server (wss:// is added when no scheme is given)
    "server_address": "poker.example.com:8443",
    "username": "my-bot",
    "password": "my-password",

    # Table choice: a specific id, or None for the first suitable one
    "table_id": None,
    "table_password": None,
    "game": "HOLDEM",               # or "FIVE_CARD_DRAW"

    # Chat-completion server (e.g. a local Jan server)
    "oracle_address": "http://localhost:1337",
    "model": "llama3.2-3b-instruct",
}

# ── Run ──
runner = BotRunner(config=config)
result = runner.run()
print(f"Session ended: {result.value}")
sys.exit(0)
