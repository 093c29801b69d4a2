"""
pokeradvisor Agents - who decides for each seat.
"""

from pokeradvisor.agents.base import BaseAgent, HumanAgent
from pokeradvisor.agents.advisor_agent import AdvisorAgent, CallAgent

__all__ = ["BaseAgent", "HumanAgent", "AdvisorAgent", "CallAgent"]
