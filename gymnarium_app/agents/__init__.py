"""agents – agent capability interface, random agent and keyboard input agent."""

from .base import AgentBehavior
from .random_agent import RandomAgent
from .input_agent import InputAgent, InputProvider

__all__ = ["AgentBehavior", "RandomAgent", "InputAgent", "InputProvider"]
