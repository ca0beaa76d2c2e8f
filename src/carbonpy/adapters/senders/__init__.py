"""Sender adapters implementing GraphiteSenderPort."""

from carbonpy.adapters.senders.in_memory import InMemoryGraphiteSender
from carbonpy.adapters.senders.tcp import GraphiteTCPSender

__all__ = [
    "GraphiteTCPSender",
    "InMemoryGraphiteSender",
]
