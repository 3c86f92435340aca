"""Thin executor over LangChain's ``create_agent`` graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, MutableMapping, Optional, Sequence

from langchain.agents import create_agent
from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.messages import BaseMessage, HumanMessage


def _extract_message_text(message: BaseMessage) -> str:
    """Return a readable string from a LangChain message instance."""

    content: Any = getattr(message, "content", "")
    if isinstance(content, str):
        return content

    if isinstance(content, Sequence):
        parts: List[str] = []
        for item in content:
            if isinstance(item, Mapping):
                if "text" in item:
                    parts.append(str(item["text"]))
            elif isinstance(item, str):
                parts.append(item)
        if parts:
            return "".join(parts)

    return str(content)


@dataclass
class ToolCallingAgent:
    """Runs one user turn through the agent graph and returns the reply text."""

    graph: Any
    base_callbacks: Sequence[BaseCallbackHandler]

    def _config(
        self, callbacks: Optional[Sequence[BaseCallbackHandler]]
    ) -> Optional[MutableMapping[str, Any]]:
        merged_callbacks: List[BaseCallbackHandler] = list(self.base_callbacks)
        if callbacks:
            merged_callbacks.extend(callbacks)
        if not merged_callbacks:
            return None
        return {"callbacks": merged_callbacks}

    async def arun(
        self, prompt: str, callbacks: Optional[Sequence[BaseCallbackHandler]] = None
    ) -> str:
        messages = {"messages": [HumanMessage(content=prompt)]}
        result: Mapping[str, Any] = await self.graph.ainvoke(
            messages, config=self._config(callbacks)
        )
        history = result.get("messages", [])
        if not history:
            return ""

        return _extract_message_text(history[-1])


def initialize_agent(
    *,
    tools: Optional[Sequence[Any]],
    llm: Any,
    system_prompt: Optional[str] = None,
    callbacks: Optional[Sequence[BaseCallbackHandler]] = None,
) -> ToolCallingAgent:
    graph = create_agent(model=llm, tools=tools or None, system_prompt=system_prompt)

    return ToolCallingAgent(graph=graph, base_callbacks=list(callbacks or ()))


__all__ = ["ToolCallingAgent", "initialize_agent"]
