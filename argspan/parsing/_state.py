from enum import Enum, auto

from argspan.exceptions import ParserStateError


class State(Enum):
    NOT_STARTED = auto()
    RUNNING = auto()
    FINISHED = auto()


class OneShot:
    """Mixin for objects that run exactly once."""

    _state: State = State.NOT_STARTED

    def _start(self):
        if self._state is not State.NOT_STARTED:
            raise ParserStateError(msg=f"{type(self).__name__} can only be run once.")
        self._state = State.RUNNING

    def _finish(self):
        self._state = State.FINISHED

    def _require_finished(self):
        if self._state is not State.FINISHED:
            raise ParserStateError(msg=f"{type(self).__name__} has not finished running.")
