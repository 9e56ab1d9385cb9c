"""
Card Shoggoths Agents - opponent decision makers

BaseAgent defines the two decisions an opponent makes; ShoggothAgent is
The Ancient One.
"""

from cardshoggoths.agents.base import BaseAgent
from cardshoggoths.agents.shoggoth import ShoggothAgent, score_hand

__all__ = ["BaseAgent", "ShoggothAgent", "score_hand"]
