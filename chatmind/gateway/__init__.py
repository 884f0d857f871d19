"""
Model Gateway
=============

The narrow interface the Agent uses to reach a language model:

    complete(messages, tools=None) -> Completion

- messages: the full outbound list (system prompt, history, new input)
- tools: capabilities to advertise; tool calling is enabled if and only
  if this is a non-empty list
- Completion.content: the final text after the gateway's own
  tool-resolution loop, or None if the model produced none

Any object with a matching `complete` method can be injected into an
Agent, which is how tests substitute scripted fakes.
"""

from chatmind.gateway.base import Completion, ModelGateway
from chatmind.gateway.openai_gateway import OpenAIGateway

__all__ = ["Completion", "ModelGateway", "OpenAIGateway"]
