"""EQ Chatbot client: conversation view-model, local identity and relay client."""

from chat_client.context import ClientContext
from chat_client.models import Message, MessageRole, User
from chat_client.session import ChatSession

__all__ = ["ChatSession", "ClientContext", "Message", "MessageRole", "User"]
