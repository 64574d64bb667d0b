# Role: Error taxonomy of the planner core. Only these kinds originate here; storage/network failures
# from outer layers propagate unchanged.

from __future__ import annotations


class PartyPlannerError(Exception):
    """Base class for all planner errors."""


class ValidationRejected(PartyPlannerError):
    """A user-supplied value failed the parse/range rule of the slot being asked.

    Recovered inside the DialogueEngine by repeating the question; never escapes apply_turn().
    """

    def __init__(self, slot: str, reason: str) -> None:
        super().__init__(f"{slot}: {reason}")
        self.slot = slot
        self.reason = reason


class ConversationNotFound(PartyPlannerError):
    def __init__(self, conversation_id: str) -> None:
        super().__init__(f"Conversation with id {conversation_id} not found")
        self.conversation_id = conversation_id


class StreamingFailure(PartyPlannerError):
    """Rendering or splitting a response for streaming failed.

    The streamer turns it into a single final apology chunk.
    """


class InvalidMetadata(PartyPlannerError):
    """Serialized message metadata did not match the expected shape."""
