# Area: Oracle
"""
Oracle - Decision requests to the language-model completion service.

This package handles:
- The chat-completion HTTP client and its test/demo stand-ins
- Prompt construction
- Action decisions (strict JSON)
- Chat replies (free text with a null sentinel)
"""

from .client import BaseOracleClient, ChatCompletionOracle, MockOracleClient, DemoOracle
from .models import ActionDecision, PokerAction
from .action_client import ActionDecisionClient, parse_action_content
from .chat_client import ChatDecisionClient, is_null_sentinel

__all__ = [
    "BaseOracleClient",
    "ChatCompletionOracle",
    "MockOracleClient",
    "DemoOracle",
    "ActionDecision",
    "PokerAction",
    "ActionDecisionClient",
    "parse_action_content",
    "ChatDecisionClient",
    "is_null_sentinel",
]
