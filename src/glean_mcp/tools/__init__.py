from .chat import ChatTool, chat
from .search import SearchTool, search

__all__ = ["SearchTool", "ChatTool", "search", "chat"]
