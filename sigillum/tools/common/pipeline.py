"""Name to tool class lookup used by the CLI and the public wrappers."""

from __future__ import annotations

from ...exceptions import ToolRegistryError
from .interfaces import BaseTool, ToolContext


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, type[BaseTool]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def register(self, name: str, tool_class: type[BaseTool]) -> None:
        if name in self._tools:
            raise ToolRegistryError(f"Tool '{name}' is already registered")
        self._tools[name] = tool_class

    def create(self, name: str, context: ToolContext) -> BaseTool:
        """Instantiate the tool registered as *name* for *context*."""

        tool_class = self._tools.get(name)
        if tool_class is None:
            raise ToolRegistryError(f"Unknown tool '{name}'")
        return tool_class(context)


registry = ToolRegistry()


def register_tool(name: str):
    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls)
        return cls

    return decorator


__all__ = ["ToolRegistry", "registry", "register_tool"]
