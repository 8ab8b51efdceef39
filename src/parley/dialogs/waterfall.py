"""Dialog that runs a fixed sequence of async steps."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from parley.dialogs.base import END_OF_TURN, Dialog, DialogReason, DialogTurnResult
from parley.dialogs.context import DialogContext
from parley.errors import ParleyError

type WaterfallStep = Callable[[WaterfallStepContext], Awaitable[DialogTurnResult]]

PERSISTED_OPTIONS = "options"
PERSISTED_VALUES = "values"
STEP_INDEX = "step_index"


class WaterfallStepContext(DialogContext):
    """A dialog context scoped to one waterfall step.

    It shares the stack of the context that ran the step, so a step can begin
    child dialogs or prompts exactly as any other caller would.
    """

    def __init__(
        self,
        parent: WaterfallDialog,
        dc: DialogContext,
        options: Any,
        values: dict[str, Any],
        index: int,
        reason: DialogReason,
        result: Any = None,
    ) -> None:
        super().__init__(dc.dialogs, dc.context, dc.state)
        self._parent = parent
        self._next_called = False
        self.index = index
        self.options = options
        self.reason = reason
        self.result = result
        self.values = values

    async def next(self, result: Any = None) -> DialogTurnResult:
        """Skip to the following step without waiting for user input."""

        if self._next_called:
            raise ParleyError(f"next() already called for step {self.index} of waterfall '{self._parent.id}'")
        self._next_called = True
        return await self._parent.resume_dialog(self, DialogReason.NEXT_CALLED, result)


class WaterfallDialog(Dialog):
    """Runs steps in order; each step's result feeds the next one."""

    def __init__(self, dialog_id: str, steps: list[WaterfallStep] | None = None) -> None:
        super().__init__(dialog_id)
        self._steps: list[WaterfallStep] = list(steps or [])

    @property
    def steps(self) -> list[WaterfallStep]:
        return list(self._steps)

    def add_step(self, step: WaterfallStep) -> WaterfallDialog:
        if step is None:
            raise ParleyError("step is required")
        self._steps.append(step)
        return self

    async def begin_dialog(self, dc: DialogContext, options: Any = None) -> DialogTurnResult:
        state = dc.active_dialog.state
        state[PERSISTED_OPTIONS] = options
        state[PERSISTED_VALUES] = {}
        return await self._run_step(dc, 0, DialogReason.BEGIN_CALLED)

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        if not dc.context.activity.is_message:
            return END_OF_TURN
        return await self.resume_dialog(dc, DialogReason.CONTINUE_CALLED, dc.context.activity.text)

    async def resume_dialog(self, dc: DialogContext, reason: DialogReason, result: Any = None) -> DialogTurnResult:
        index = dc.active_dialog.state[STEP_INDEX]
        return await self._run_step(dc, index + 1, reason, result)

    async def on_step(self, step_context: WaterfallStepContext) -> DialogTurnResult:
        return await self._steps[step_context.index](step_context)

    def dump_state(self, state: Any) -> Any:
        return {
            PERSISTED_OPTIONS: state.get(PERSISTED_OPTIONS),
            PERSISTED_VALUES: dict(state.get(PERSISTED_VALUES) or {}),
            STEP_INDEX: state.get(STEP_INDEX, 0),
        }

    def load_state(self, data: Any) -> Any:
        data = data or {}
        return {
            PERSISTED_OPTIONS: data.get(PERSISTED_OPTIONS),
            PERSISTED_VALUES: dict(data.get(PERSISTED_VALUES) or {}),
            STEP_INDEX: int(data.get(STEP_INDEX, 0)),
        }

    async def _run_step(
        self,
        dc: DialogContext,
        index: int,
        reason: DialogReason,
        result: Any = None,
    ) -> DialogTurnResult:
        if index >= len(self._steps):
            return await dc.end_dialog(result)

        state = dc.active_dialog.state
        state[STEP_INDEX] = index
        step_context = WaterfallStepContext(
            self,
            dc,
            state[PERSISTED_OPTIONS],
            state[PERSISTED_VALUES],
            index,
            reason,
            result,
        )
        logger.debug("waterfall.step id={} index={} reason={}", self.id, index, reason)
        return await self.on_step(step_context)
