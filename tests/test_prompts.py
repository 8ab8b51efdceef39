from __future__ import annotations

from decimal import Decimal

import pytest

from parley.activity import Activity, ActivityTypes, Attachment, InputHints
from parley.choices import FoundChoice, ListStyle
from parley.dialogs import DialogSet, DialogState, DialogTurnStatus
from parley.errors import ConfigurationError
from parley.prompts import (
    ActivityPrompt,
    AttachmentPrompt,
    ChoicePrompt,
    ConfirmPrompt,
    NumberPrompt,
    PromptOptions,
    PromptValidatorContext,
    TextPrompt,
)
from parley.testing import TestFlow
from parley.turn import TurnContext
from support import WaitingDialog, message, turn


async def _start(dialogs: DialogSet, dialog_id: str, options: PromptOptions, state: DialogState) -> TurnContext:
    context = turn("hi")
    await dialogs.create_context(context, state).prompt(dialog_id, options)
    return context


@pytest.mark.asyncio
async def test_confirm_prompt_retries_then_completes() -> None:
    dialogs = DialogSet([ConfirmPrompt("confirm")])
    state = DialogState()

    context = turn("hi")
    first = await dialogs.create_context(context, state).prompt("confirm", PromptOptions(prompt="Continue?"))
    assert first.status == DialogTurnStatus.WAITING
    assert [sent.text for sent in context.sent_activities] == ["Continue? (1) Yes or (2) No"]

    context = turn("maybe")
    second = await dialogs.create_context(context, state).continue_dialog()
    assert second.status == DialogTurnStatus.WAITING
    assert len(state.dialog_stack) == 1
    assert [sent.text for sent in context.sent_activities] == ["Continue? (1) Yes or (2) No"]

    context = turn("yes")
    third = await dialogs.create_context(context, state).continue_dialog()
    assert third.status == DialogTurnStatus.COMPLETE
    assert third.result is True
    assert state.dialog_stack == []
    assert context.sent_activities == []


@pytest.mark.asyncio
async def test_confirm_prompt_scripted_with_test_flow() -> None:
    flow = TestFlow(DialogSet([ConfirmPrompt("confirm")]), "confirm", PromptOptions(prompt="Continue?"))

    await (
        flow.send("hello")
        .assert_reply("Continue? (1) Yes or (2) No")
        .send("maybe")
        .assert_reply("Continue? (1) Yes or (2) No")
        .send("yes")
        .assert_no_reply()
        .run()
    )

    assert flow.depth == 0
    assert flow.last_result is not None
    assert flow.last_result.status == DialogTurnStatus.COMPLETE
    assert flow.last_result.result is True


@pytest.mark.asyncio
async def test_rejections_keep_prompt_on_top_until_first_acceptance() -> None:
    dialogs = DialogSet([NumberPrompt("number", number_type=int)])
    state = DialogState()
    await _start(dialogs, "number", PromptOptions(prompt="How many?", retry_prompt="A number please."), state)

    for text in ["lots", "a few", "some"]:
        context = turn(text)
        result = await dialogs.create_context(context, state).continue_dialog()
        assert result.status == DialogTurnStatus.WAITING
        assert [frame.id for frame in state.dialog_stack] == ["number"]
        assert [sent.text for sent in context.sent_activities] == ["A number please."]

    result = await dialogs.create_context(turn("4"), state).continue_dialog()

    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == 4
    assert state.dialog_stack == []


@pytest.mark.asyncio
async def test_non_message_turn_is_ignored() -> None:
    calls: list[str] = []

    def validator(prompt_context: PromptValidatorContext[str]) -> bool:
        calls.append("called")
        return True

    dialogs = DialogSet([TextPrompt("text", validator)])
    state = DialogState()
    await _start(dialogs, "text", PromptOptions(prompt="Name?"), state)
    before = dialogs.dump_state(state)

    context = TurnContext(Activity(type=ActivityTypes.TYPING, channel_id="test"))
    result = await dialogs.create_context(context, state).continue_dialog()

    assert result.status == DialogTurnStatus.WAITING
    assert calls == []
    assert context.sent_activities == []
    assert dialogs.dump_state(state) == before


@pytest.mark.asyncio
async def test_validator_overrides_recognition() -> None:
    dialogs = DialogSet(
        [
            TextPrompt("strict", lambda prompt_context: False),
            NumberPrompt("lenient", lambda prompt_context: True),
        ]
    )
    state = DialogState()
    await _start(dialogs, "strict", PromptOptions(prompt="Say anything"), state)
    rejected = await dialogs.create_context(turn("anything"), state).continue_dialog()
    assert rejected.status == DialogTurnStatus.WAITING

    state = DialogState()
    await _start(dialogs, "lenient", PromptOptions(prompt="Number?"), state)
    accepted = await dialogs.create_context(turn("not a number"), state).continue_dialog()
    assert accepted.status == DialogTurnStatus.COMPLETE
    assert accepted.result is None


@pytest.mark.asyncio
async def test_validator_reply_suppresses_retry_prompt() -> None:
    async def validator(prompt_context: PromptValidatorContext[str]) -> bool:
        value = prompt_context.recognized.value or ""
        if len(value) < 3:
            await prompt_context.context.send_activity("Too short.")
            return False
        return True

    dialogs = DialogSet([TextPrompt("name", validator)])
    state = DialogState()
    await _start(dialogs, "name", PromptOptions(prompt="Name?", retry_prompt="Name again?"), state)

    context = turn("Al")
    result = await dialogs.create_context(context, state).continue_dialog()

    assert result.status == DialogTurnStatus.WAITING
    assert [sent.text for sent in context.sent_activities] == ["Too short."]


@pytest.mark.asyncio
async def test_validator_state_survives_retries() -> None:
    def validator(prompt_context: PromptValidatorContext[str]) -> bool:
        attempts = prompt_context.state.get("attempts", 0) + 1
        prompt_context.state["attempts"] = attempts
        return attempts >= 3

    flow = TestFlow(DialogSet([TextPrompt("text", validator)]), "text", PromptOptions(prompt="Go"))

    await flow.send("start").send("one").send("two").send("three").run()

    assert flow.last_result is not None
    assert flow.last_result.status == DialogTurnStatus.COMPLETE
    assert flow.last_result.result == "three"


@pytest.mark.asyncio
async def test_begin_sets_input_hint_on_a_copy_of_the_options() -> None:
    options = PromptOptions(prompt="Name?", retry_prompt=Activity(text="Again?", input_hint=InputHints.ACCEPTING_INPUT))
    dialogs = DialogSet([TextPrompt("name")])

    context = await _start(dialogs, "name", options, DialogState())

    assert context.sent_activities[0].input_hint == InputHints.EXPECTING_INPUT
    assert options.prompt is not None
    assert options.prompt.input_hint is None
    assert options.retry_prompt is not None
    assert options.retry_prompt.input_hint == InputHints.ACCEPTING_INPUT


@pytest.mark.asyncio
async def test_prompt_without_options_is_a_configuration_error() -> None:
    dc = DialogSet([TextPrompt("name")]).create_context(turn())

    with pytest.raises(ConfigurationError):
        await dc.begin_dialog("name")


@pytest.mark.asyncio
async def test_unexpected_resume_reprompts() -> None:
    dialogs = DialogSet([TextPrompt("name"), WaitingDialog("interruption", "ignored")])
    state = DialogState()
    await _start(dialogs, "name", PromptOptions(prompt="Name?"), state)
    await dialogs.create_context(turn(), state).begin_dialog("interruption")

    context = turn("whatever")
    result = await dialogs.create_context(context, state).continue_dialog()

    assert result.status == DialogTurnStatus.WAITING
    assert [frame.id for frame in state.dialog_stack] == ["name"]
    assert [sent.text for sent in context.sent_activities] == ["Name?"]


@pytest.mark.asyncio
async def test_reprompt_dialog_resends_prompt() -> None:
    dialogs = DialogSet([TextPrompt("name")])
    state = DialogState()
    await _start(dialogs, "name", PromptOptions(prompt="Name?", retry_prompt="Again?"), state)

    context = turn()
    await dialogs.create_context(context, state).reprompt_dialog()

    assert [sent.text for sent in context.sent_activities] == ["Name?"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("number_type", "text", "expected"),
    [
        (int, "I want 3 of them", 3),
        (int, "twenty five", 25),
        (int, "one hundred", 100),
        (float, "2.5", 2.5),
        (Decimal, "1.1", Decimal("1.1")),
    ],
)
async def test_number_prompt_types(number_type: type, text: str, expected: object) -> None:
    dialogs = DialogSet([NumberPrompt("number", number_type=number_type)])
    state = DialogState()
    await _start(dialogs, "number", PromptOptions(prompt="Number?"), state)

    result = await dialogs.create_context(turn(text), state).continue_dialog()

    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result == expected
    assert type(result.result) is number_type


@pytest.mark.asyncio
async def test_number_prompt_int_rejects_fractions_and_honours_locale() -> None:
    dialogs = DialogSet([NumberPrompt("int", number_type=int), NumberPrompt("float", default_locale="es-es")])
    state = DialogState()
    await _start(dialogs, "int", PromptOptions(prompt="Whole number?"), state)
    assert (await dialogs.create_context(turn("2.5"), state).continue_dialog()).status == DialogTurnStatus.WAITING

    state = DialogState()
    await _start(dialogs, "float", PromptOptions(prompt="¿Número?"), state)
    result = await dialogs.create_context(turn("1,5"), state).continue_dialog()
    assert result.result == 1.5


def test_number_prompt_rejects_unsupported_types() -> None:
    with pytest.raises(ConfigurationError):
        NumberPrompt("number", number_type=str)


@pytest.mark.asyncio
async def test_choice_prompt_renders_and_recognizes() -> None:
    options = PromptOptions(prompt="Pick a color", choices=["red", "green", "blue"])
    flow = TestFlow(DialogSet([ChoicePrompt("color")]), "color", options)

    await (
        flow.send("hi")
        .assert_reply("Pick a color (1) red, (2) green, or (3) blue")
        .send("purple")
        .assert_reply("Pick a color (1) red, (2) green, or (3) blue")
        .send("the blue one")
        .run()
    )

    assert flow.last_result is not None
    found = flow.last_result.result
    assert isinstance(found, FoundChoice)
    assert (found.value, found.index) == ("blue", 2)


@pytest.mark.asyncio
async def test_choice_prompt_accepts_index_and_list_style() -> None:
    prompt = ChoicePrompt("color")
    prompt.style = ListStyle.LIST
    options = PromptOptions(prompt="Pick:", choices=["red", "green"])
    flow = TestFlow(DialogSet([prompt]), "color", options)

    await flow.send("hi").assert_reply("Pick:\n\n   1. red\n   2. green").send("2").run()

    assert flow.last_result is not None
    assert flow.last_result.result.value == "green"


@pytest.mark.asyncio
async def test_choice_prompt_suggested_actions_on_capable_channel() -> None:
    options = PromptOptions(prompt="Pick a color", choices=["red", "green"])
    flow = TestFlow(DialogSet([ChoicePrompt("color")]), "color", options, channel_id="facebook")

    def has_buttons(activity: Activity) -> bool:
        return activity.suggested_actions is not None and len(activity.suggested_actions.actions) == 2

    await flow.send("hi").assert_reply(has_buttons).run()


@pytest.mark.asyncio
async def test_confirm_prompt_accepts_numbers_and_locale_words() -> None:
    flow = TestFlow(DialogSet([ConfirmPrompt("confirm")]), "confirm", PromptOptions(prompt="Continue?"))
    await flow.send("hi").send("2").run()
    assert flow.last_result is not None
    assert flow.last_result.result is False

    french = TestFlow(
        DialogSet([ConfirmPrompt("confirm")]),
        "confirm",
        PromptOptions(prompt="Continuer?"),
        locale="fr-fr",
    )
    await french.send("salut").assert_reply("Continuer? (1) Oui ou (2) Non").send("oui").run()
    assert french.last_result is not None
    assert french.last_result.result is True


@pytest.mark.asyncio
async def test_confirm_prompt_unknown_locale_falls_back_to_english() -> None:
    flow = TestFlow(
        DialogSet([ConfirmPrompt("confirm")]),
        "confirm",
        PromptOptions(prompt="Continue?"),
        locale="xx-yy",
    )

    await flow.send("hi").assert_reply("Continue? (1) Yes or (2) No").run()


@pytest.mark.asyncio
async def test_attachment_prompt() -> None:
    dialogs = DialogSet([AttachmentPrompt("upload")])
    state = DialogState()
    await _start(dialogs, "upload", PromptOptions(prompt="Send a file", retry_prompt="A file please"), state)

    context = turn("no file")
    missing = await dialogs.create_context(context, state).continue_dialog()
    assert missing.status == DialogTurnStatus.WAITING
    assert [sent.text for sent in context.sent_activities] == ["A file please"]

    upload = message("here", attachments=[Attachment(content_type="image/png", name="cat.png")])
    result = await dialogs.create_context(TurnContext(upload), state).continue_dialog()
    assert result.status == DialogTurnStatus.COMPLETE
    assert [attachment.name for attachment in result.result] == ["cat.png"]


def test_activity_prompt_requires_validator() -> None:
    with pytest.raises(ConfigurationError):
        ActivityPrompt("event", None)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_activity_prompt_waits_for_accepted_activity_without_retry() -> None:
    def is_event(prompt_context: PromptValidatorContext[Activity]) -> bool:
        value = prompt_context.recognized.value
        return value is not None and value.type == ActivityTypes.EVENT

    dialogs = DialogSet([ActivityPrompt("event", is_event)])
    state = DialogState()
    options = PromptOptions(prompt="Waiting for an event", retry_prompt="Still waiting")
    first = await _start(dialogs, "event", options, state)
    assert [sent.text for sent in first.sent_activities] == ["Waiting for an event"]

    context = turn("just text")
    rejected = await dialogs.create_context(context, state).continue_dialog()
    assert rejected.status == DialogTurnStatus.WAITING
    assert context.sent_activities == []

    event = Activity(type=ActivityTypes.EVENT, name="done", channel_id="test")
    result = await dialogs.create_context(TurnContext(event), state).continue_dialog()
    assert result.status == DialogTurnStatus.COMPLETE
    assert result.result.name == "done"
