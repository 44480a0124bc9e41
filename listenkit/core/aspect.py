"""
Method advice for listenkit.

Installs a dispatcher in a named attribute of a target so that extra callables
run before, around, or after whatever the attribute originally held. Every
advice call returns a handle whose ``cancel()`` removes just that advice.

    handle = after(button, "onclick", on_click, True)
    button.onclick(event)   # original handler (if any), then on_click(event)
    handle.cancel()
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional


class _Advice:
    def __init__(
        self, kind: str, advice: Callable[..., Any], receive_arguments: bool = False
    ):
        self.kind = kind
        self.advice = advice
        self.receive_arguments = receive_arguments
        self.cancelled = False


class AdviceHandle:
    """Handle for a single piece of advice."""

    def __init__(self, dispatcher: "AdviceDispatcher", advice: _Advice):
        self._dispatcher = dispatcher
        self._advice: Optional[_Advice] = advice

    @property
    def cancelled(self) -> bool:
        return self._advice is None

    def cancel(self) -> None:
        if self._advice is None:
            return
        self._dispatcher._remove(self._advice)
        self._advice = None


class AdviceDispatcher:
    """
    Callable placed in an advised slot.

    Before advice runs newest first and may replace the arguments by returning
    a sequence. Around advice is composed at call time, newest outermost.
    After advice runs oldest first; with ``receive_arguments`` it is called
    with the original arguments, otherwise with the result, which it may
    replace by returning something other than None.
    """

    def __init__(self, original: Optional[Callable[..., Any]] = None):
        self.original = original
        self._before: List[_Advice] = []
        self._around: List[_Advice] = []
        self._after: List[_Advice] = []

    def __call__(self, *args, **kwargs):
        # Iterate over snapshots; advice cancelled mid-dispatch is skipped
        for advice in list(self._before):
            if advice.cancelled:
                continue
            new_args = advice.advice(*args, **kwargs)
            if new_args is not None:
                args = tuple(new_args)

        call = self._call_original
        for advice in list(self._around):
            if not advice.cancelled:
                call = advice.advice(call)
        result = call(*args, **kwargs)

        for advice in list(self._after):
            if advice.cancelled:
                continue
            if advice.receive_arguments:
                advice.advice(*args, **kwargs)
            else:
                new_result = advice.advice(result)
                if new_result is not None:
                    result = new_result
        return result

    def _call_original(self, *args, **kwargs):
        if self.original is not None:
            return self.original(*args, **kwargs)
        return None

    def _add(self, advice: _Advice) -> AdviceHandle:
        if advice.kind == "before":
            self._before.insert(0, advice)
        elif advice.kind == "around":
            self._around.append(advice)
        else:
            self._after.append(advice)
        return AdviceHandle(self, advice)

    def _remove(self, advice: _Advice) -> None:
        advice.cancelled = True
        for chain in (self._before, self._around, self._after):
            if advice in chain:
                chain.remove(advice)

    @property
    def advice_count(self) -> int:
        return len(self._before) + len(self._around) + len(self._after)


def _dispatcher_for(target: Any, method_name: str) -> AdviceDispatcher:
    existing = getattr(target, method_name, None)
    if isinstance(existing, AdviceDispatcher):
        return existing
    dispatcher = AdviceDispatcher(existing if callable(existing) else None)
    setattr(target, method_name, dispatcher)
    return dispatcher


def before(target: Any, method_name: str, advice: Callable[..., Any]) -> AdviceHandle:
    """Run ``advice`` with the call arguments before the original method."""
    return _dispatcher_for(target, method_name)._add(_Advice("before", advice))


def around(
    target: Any,
    method_name: str,
    advice: Callable[[Callable[..., Any]], Callable[..., Any]],
) -> AdviceHandle:
    """Wrap the method: ``advice(previous)`` must return the replacement callable."""
    return _dispatcher_for(target, method_name)._add(_Advice("around", advice))


def after(
    target: Any,
    method_name: str,
    advice: Callable[..., Any],
    receive_arguments: bool = False,
) -> AdviceHandle:
    """Run ``advice`` after the original method."""
    return _dispatcher_for(target, method_name)._add(
        _Advice("after", advice, receive_arguments)
    )
