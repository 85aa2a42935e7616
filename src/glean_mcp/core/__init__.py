from .base import BaseTool, ClientAccessor, ToolDescriptor, ToolMetadata

__all__ = ["BaseTool", "ClientAccessor", "ToolDescriptor", "ToolMetadata"]
