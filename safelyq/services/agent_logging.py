"""Logging setup and callback handlers that log agent activity."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.outputs import LLMResult

logger = logging.getLogger("safelyq.agent")


def configure_logging() -> None:
    """Ensure application logs use the INFO level by default."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(logging.INFO)


def _tool_name(serialized: Optional[Dict[str, Any]], kwargs: Dict[str, Any]) -> Optional[str]:
    if isinstance(serialized, dict) and serialized.get("name"):
        return serialized["name"]
    name = kwargs.get("name")
    return name if isinstance(name, str) else None


class AgentLoggingCallbackHandler(BaseCallbackHandler):
    """Logs the internal decisions the agent makes while running."""

    def on_llm_start(
        self, serialized: Dict[str, Any], prompts: List[str], **kwargs: Any
    ) -> None:
        for index, prompt in enumerate(prompts, start=1):
            logger.info("LLM prompt %s: %s", index, prompt)

    def on_llm_end(self, response: LLMResult, **kwargs: Any) -> None:
        if not response.generations:
            return
        generations = response.generations[0]
        if not generations:
            return
        generation = generations[0]
        text = getattr(generation, "text", None)
        if not text and getattr(generation, "message", None) is not None:
            message = generation.message
            text = getattr(message, "tool_calls", None) or getattr(message, "content", None)
        logger.info("LLM response: %s", text if text else generation)

    def on_llm_error(self, error: BaseException, **kwargs: Any) -> None:
        logger.error("LLM error: %s", error)

    def on_tool_start(
        self,
        serialized: Dict[str, Any],
        input_str: str,
        **kwargs: Any,
    ) -> None:
        logger.info(
            "Tool '%s' started with input: %s", _tool_name(serialized, kwargs), input_str
        )

    def on_tool_end(self, output: Any, **kwargs: Any) -> None:
        logger.info("Tool finished with output: %s", output)

    def on_tool_error(self, error: BaseException, **kwargs: Any) -> None:
        logger.error("Tool error: %s", error)


class AgentRunCollector(BaseCallbackHandler):
    """Capture the last tool call made during an agent run."""

    def __init__(self) -> None:
        self.tool_name: Optional[str] = None
        self.tool_input: Any = None
        self.tool_output: Any = None

    def on_tool_start(
        self,
        serialized: Dict[str, Any],
        input_str: str,
        **kwargs: Any,
    ) -> None:
        self.tool_name = _tool_name(serialized, kwargs)
        inputs = kwargs.get("inputs")
        self.tool_input = inputs if inputs is not None else input_str
        self.tool_output = None

    def on_tool_end(self, output: Any, **kwargs: Any) -> None:
        self.tool_output = getattr(output, "content", output)
