# Role: Typing-effect delivery of assistant text. Picks a contextual template for the live-preview path,
# splits the text into growing word prefixes, and paces them with per-word delays. Consumers always see
# exactly one final chunk, even when rendering fails (the final chunk is then a fixed apology).

from __future__ import annotations

import asyncio
import time
import uuid
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Iterator, List, Optional, Tuple

import party_planner.config as config
from party_planner.core.errors import StreamingFailure
from party_planner.models.result import StreamChunk
from party_planner.prompts.stream_templates import STREAM_TEMPLATES, TemplateKey
from party_planner.utils.context_parser import parse_context

FALLBACK_MESSAGE = "I apologize, but I'm having trouble generating a response right now. Please try again."

QUICK_WORDS = frozenset({"a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with"})

_SHORT_CONTEXT = 20

Sleep = Callable[[float], Awaitable[None]]


def new_message_id() -> str:
    return f"msg_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def new_error_message_id() -> str:
    return f"msg_error_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def select_template(prompt: str, context: str) -> TemplateKey:
    # Key line: first match wins, most advanced planning stage checked first (after greetings).
    ctx = (context or "").lower()
    prompt_low = (prompt or "").lower()

    if "hello" in prompt_low or "hi" in prompt_low or len(ctx) < _SHORT_CONTEXT:
        return TemplateKey.GREETING
    if "budget" in ctx:
        return TemplateKey.FINAL_PLANNING
    if "guest_count" in ctx:
        return TemplateKey.BUDGET_DISCUSSION
    if "party_name" in ctx and "party_dates" not in ctx:
        return TemplateKey.PLANNING_DETAILS
    if "activity_preference" in ctx and "party_name" not in ctx:
        return TemplateKey.ACTIVITY_FOLLOWUP
    if "city" in ctx and "activity_preference" not in ctx:
        return TemplateKey.CITY_FOLLOWUP
    if "party_type" in ctx and "city" not in ctx:
        return TemplateKey.PARTY_TYPE_FOLLOWUP
    return TemplateKey.DEFAULT


def render_contextual_response(prompt: str, context: str) -> str:
    template = STREAM_TEMPLATES[select_template(prompt, context)]
    return template.format_map(parse_context(context).as_placeholders())


def word_delay(index: int, total: int, word: str, base_delay: float) -> float:
    # Exactly one rule applies per word, checked in this order.
    if word.endswith((".", "!", "?")):
        return base_delay * 1.5
    if word.lower() in QUICK_WORDS:
        return base_delay * 0.5
    if index > total * 0.8:
        return base_delay * 0.7
    return base_delay


@dataclass
class TypingStream:
    """
    Explicit state machine over one response.

    Each next_chunk() call returns the next cumulative word prefix plus the pause to take before the
    following chunk (0 for the final one). timeline() exposes when every chunk is due.
    """

    text: str
    base_delay: float
    message_id: str = field(default_factory=new_message_id)

    def __post_init__(self) -> None:
        # Key line: empty text still yields one (empty) final chunk.
        self._words: List[str] = self.text.split() or [""]
        self._index = 0

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def done(self) -> bool:
        return self._index >= len(self._words)

    def next_chunk(self) -> Tuple[StreamChunk, float]:
        if self.done:
            raise StreamingFailure("stream already finished")

        i = self._index
        self._index += 1
        is_final = i == len(self._words) - 1

        chunk = StreamChunk(
            text=" ".join(self._words[: i + 1]),
            is_final=is_final,
            message_id=self.message_id if is_final else None,
        )
        delay = 0.0 if is_final else word_delay(i, len(self._words), self._words[i], self.base_delay)
        return chunk, delay

    def timeline(self, start: float = 0.0) -> List[Tuple[float, StreamChunk]]:
        # Role: (due_at, chunk) for the remaining chunks, without consuming the stream.
        due = start
        out: List[Tuple[float, StreamChunk]] = []
        probe = TypingStream(self.text, self.base_delay, self.message_id)
        probe._index = self._index
        while not probe.done:
            chunk, delay = probe.next_chunk()
            out.append((due, chunk))
            due += delay
        return out


def iter_chunks(text: str, message_id: Optional[str] = None) -> Iterator[StreamChunk]:
    # Role: delay-free iteration for callers that render the typing effect themselves.
    stream = TypingStream(text, 0.0, message_id or new_message_id())
    while not stream.done:
        chunk, _ = stream.next_chunk()
        yield chunk


class ResponseStreamer:
    def __init__(
        self,
        base_delay: Optional[float] = None,
        sleep: Optional[Sleep] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        # Key line: tests inject sleep/base_delay to make streaming instant and deterministic.
        self._base_delay = base_delay
        self._sleep = sleep or asyncio.sleep
        self._id_factory = id_factory or new_message_id

    @property
    def base_delay(self) -> float:
        if self._base_delay is not None:
            return self._base_delay
        return config.STREAM_BASE_DELAY_MS / 1000.0

    def stream_text(self, text: str) -> AsyncIterator[StreamChunk]:
        return self._run(lambda: text)

    def stream_response(self, prompt: str, context: str) -> AsyncIterator[StreamChunk]:
        return self._run(lambda: render_contextual_response(prompt, context))

    def _plan(self, render: Callable[[], str]) -> TypingStream:
        try:
            text = render()
            if not isinstance(text, str):
                raise TypeError(f"expected str, got {type(text).__name__}")
            return TypingStream(text, self.base_delay, self._id_factory())
        except Exception as e:
            raise StreamingFailure(f"could not prepare response: {e!r}") from e

    async def _run(self, render: Callable[[], str]) -> AsyncIterator[StreamChunk]:
        # 1) Render + split (fresh per call)
        # 2) Yield prefixes, sleeping between non-final chunks
        # 3) Any failure -> single final apology chunk
        try:
            stream = self._plan(render)
            while not stream.done:
                chunk, delay = stream.next_chunk()
                yield chunk
                if not chunk.is_final and delay > 0:
                    await self._sleep(delay)
        except Exception as e:
            if config.DEBUG:
                print("[STREAMER] streaming failed:", repr(e))
            yield StreamChunk(text=FALLBACK_MESSAGE, is_final=True, message_id=new_error_message_id())
