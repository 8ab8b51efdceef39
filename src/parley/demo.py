"""Small pizza-order conversation used by the CLI."""

from __future__ import annotations

from parley.choices.models import FindChoicesOptions
from parley.config import Settings
from parley.dialogs import DialogSet, DialogTurnResult, WaterfallDialog, WaterfallStepContext
from parley.prompts import ChoicePrompt, ConfirmPrompt, NumberPrompt, PromptOptions, PromptValidatorContext, TextPrompt

ORDER_DIALOG = "order"
SIZES = ["Small", "Medium", "Large"]


async def _positive_quantity(prompt_context: PromptValidatorContext[int]) -> bool:
    recognized = prompt_context.recognized
    return recognized.succeeded and recognized.value is not None and 0 < recognized.value <= 20


async def ask_name(step: WaterfallStepContext) -> DialogTurnResult:
    return await step.prompt("name", PromptOptions(prompt="What's your name?"))


async def ask_quantity(step: WaterfallStepContext) -> DialogTurnResult:
    step.values["name"] = step.result
    return await step.prompt(
        "quantity",
        PromptOptions(prompt="How many pizzas?", retry_prompt="Please enter a number between 1 and 20."),
    )


async def ask_size(step: WaterfallStepContext) -> DialogTurnResult:
    step.values["quantity"] = step.result
    return await step.prompt("size", PromptOptions(prompt="Which size?", choices=SIZES))


async def ask_confirm(step: WaterfallStepContext) -> DialogTurnResult:
    step.values["size"] = step.result.value
    values = step.values
    return await step.prompt(
        "confirm",
        PromptOptions(prompt=f"{values['quantity']} x {values['size']} for {values['name']}, place the order?"),
    )


async def finish(step: WaterfallStepContext) -> DialogTurnResult:
    if step.result:
        await step.context.send_activity("Order placed.")
    else:
        await step.context.send_activity("Order cancelled.")
    return await step.end_dialog({**step.values, "confirmed": bool(step.result)})


def build_demo_dialogs(settings: Settings | None = None) -> DialogSet:
    settings = settings or Settings()

    size_prompt = ChoicePrompt("size", default_locale=settings.default_locale)
    size_prompt.recognizer_options = FindChoicesOptions(max_token_distance=settings.max_token_distance)

    return DialogSet(
        [
            WaterfallDialog(ORDER_DIALOG, [ask_name, ask_quantity, ask_size, ask_confirm, finish]),
            TextPrompt("name"),
            NumberPrompt("quantity", _positive_quantity, default_locale=settings.default_locale, number_type=int),
            size_prompt,
            ConfirmPrompt("confirm", default_locale=settings.default_locale),
        ]
    )
