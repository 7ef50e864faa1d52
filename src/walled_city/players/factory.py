from __future__ import annotations
import os
from typing import Dict, Type
from .agents.base import Agent
from .agents.human_agent import HumanAgent
from .agents.random_agent import RandomAgent
from .agents.search_agent import SearchAgent

class AgentFactory:
    _registry: Dict[str, Type[Agent]] = {}

    @classmethod
    def register(cls, name: str, agent_cls: Type[Agent]) -> None:
        cls._registry[name] = agent_cls

    @classmethod
    def create(cls, config_str: str) -> Agent:
        """
        Create an agent from a configuration string.
        Format: "type:arg1,arg2" or just "type"
        Examples:
            - "human"
            - "human:Alice"
            - "random" / "random:7" (seed)
            - "search:3" (base depth)
            - "search:2,1.5" (base depth, time budget in seconds)
        """
        parts = config_str.split(":", 1)
        agent_type = parts[0].lower()
        args_str = parts[1] if len(parts) > 1 else ""

        if agent_type not in cls._registry:
            raise ValueError(f"Unknown agent type: {agent_type}. Available: {list(cls._registry.keys())}")

        agent_cls = cls._registry[agent_type]
        args = [a.strip() for a in args_str.split(",")] if args_str else []

        try:
            if agent_type == "search":
                depth = int(args[0]) if len(args) > 0 else int(os.getenv("CITY_SEARCH_DEPTH", "2"))
                time_budget = float(args[1]) if len(args) > 1 else float(os.getenv("CITY_TIME_BUDGET", "3.0"))
                if depth < 1:
                    raise ValueError("depth must be at least 1")
                return agent_cls(depth=depth, time_budget=time_budget)
            elif agent_type == "human":
                name = args[0] if len(args) > 0 else "Human"
                return agent_cls(name=name)
            elif agent_type == "random":
                seed = int(args[0]) if len(args) > 0 else None
                return agent_cls(seed=seed)
            else:
                return agent_cls(*args)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Failed to create agent '{agent_type}' with args {args}: {e}") from e

# Register default agents
AgentFactory.register("human", HumanAgent)
AgentFactory.register("random", RandomAgent)
AgentFactory.register("search", SearchAgent)
