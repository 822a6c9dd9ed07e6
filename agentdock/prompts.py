"""System prompts sent to the completion model."""

from agentdock.models.agent import Agent


GENERAL_SYSTEM_PROMPT = (
    "You are a helpful assistant that helps with tool integrations and agent management."
)


def agent_system_prompt(agent: Agent) -> str:
    """Persona prompt for answering as a registered agent."""
    prompt = (
        f"You are {agent.name}, an AI agent with the following capabilities:\n"
        f"{agent.description}\n\n"
        "Respond to the user's query in a helpful and informative way.\n"
        "If you need to use specific tools to fulfill the request, mention that in your response."
    )
    if agent.tools:
        prompt += f"\nTools available to you: {', '.join(agent.tools)}."
    return prompt


def tool_system_prompt(tool: str, action: str) -> str:
    """Prompt for a model specialised in one tool and one kind of task."""
    return (
        f"You are an AI assistant specialized in working with {tool}.\n"
        f"Your task is to help users {action}.\n"
        "Provide clear, step-by-step instructions and relevant information.\n"
        "Be concise, accurate, and helpful."
    )
