import queue
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from rails.errors import GameAborted


@dataclass
class Prompt:
    player: Optional[str]
    instruction: str
    selectable: List[str] = field(default_factory=list)
    buttons: List[str] = field(default_factory=list)
    can_pass: bool = False

    def choices(self):
        return set(self.selectable) | set(self.buttons)

    def accepts(self, value):
        return value in self.choices() or (self.can_pass and value == "")

    def as_dict(self):
        return {
            "player": self.player,
            "instruction": self.instruction,
            "selectable": list(self.selectable),
            "buttons": list(self.buttons),
            "canPass": self.can_pass,
        }


class DecisionChannel:
    """Request/response link between the engine and whoever makes the decisions.

    ``read_input`` is called with the pending ``Prompt`` and blocks until it
    has a value. ``publish`` is called with every prompt before any input is
    read, so the caller can push a fresh snapshot to its renderer.
    """

    def __init__(self, read_input: Callable[[Prompt], str], publish: Optional[Callable[[Prompt], None]] = None):
        self.read_input = read_input
        self.publish = publish

    def request_choice(self, instruction, selectable=(), buttons=(), can_pass=False, player=None):
        prompt = Prompt(
            player=player.name if player is not None else None,
            instruction=instruction,
            selectable=list(selectable),
            buttons=list(buttons),
            can_pass=can_pass,
        )
        if self.publish is not None:
            self.publish(prompt)

        choices = prompt.choices()
        if not choices:
            return ""
        if len(choices) == 1 and not can_pass:
            return next(iter(choices))
        while True:
            value = self.read_input(prompt)
            if prompt.accepts(value):
                return value


_CLOSED = object()


class QueueInput:
    """Single-slot input source fed from another thread.

    ``close`` wakes a waiting reader with ``GameAborted``, which unwinds
    the game thread.
    """

    def __init__(self):
        self.queue = queue.Queue(maxsize=1)
        self.closed = False

    def __call__(self, prompt):
        value = self.queue.get()
        if value is _CLOSED:
            raise GameAborted("input closed")
        return value

    def put(self, value):
        """Queue one decision; False if the previous one was not consumed yet."""
        if self.closed:
            return False
        try:
            self.queue.put_nowait(value)
        except queue.Full:
            return False
        return True

    def close(self):
        self.closed = True
        # Replace any unread decision with the close marker.
        try:
            self.queue.get_nowait()
        except queue.Empty:
            pass
        self.queue.put(_CLOSED)


class ScriptedInput:
    """Replays a fixed list of answers, one per read.

    An answer may be a callable taking the prompt, for choices that are not
    known in advance.
    """

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise RuntimeError(f"no scripted answer left for: {prompt.instruction}")
        answer = self.answers.pop(0)
        return answer(prompt) if callable(answer) else answer
