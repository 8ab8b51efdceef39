"""Locale tables shared by the choice and confirm prompts."""

from __future__ import annotations

from dataclasses import dataclass, replace

from parley.activity import Activity
from parley.choices.models import Choice, ChoiceFactoryOptions

ENGLISH = "en-us"


@dataclass(frozen=True)
class CultureDefaults:
    yes: str
    no: str
    options: ChoiceFactoryOptions


def _defaults(yes: str, no: str, separator: str, inline_or: str, inline_or_more: str) -> CultureDefaults:
    return CultureDefaults(yes, no, ChoiceFactoryOptions(separator, inline_or, inline_or_more, True))


CULTURE_DEFAULTS: dict[str, CultureDefaults] = {
    "es-es": _defaults("Sí", "No", ", ", " o ", ", o "),
    "nl-nl": _defaults("Ja", "Nee", ", ", " of ", ", of "),
    "en-us": _defaults("Yes", "No", ", ", " or ", ", or "),
    "fr-fr": _defaults("Oui", "Non", ", ", " ou ", ", ou "),
    "de-de": _defaults("Ja", "Nein", ", ", " oder ", ", oder "),
    "ja-jp": _defaults("はい", "いいえ", "、 ", " または ", "、 または "),
    "pt-br": _defaults("Sim", "Não", ", ", " ou ", ", ou "),
    "zh-cn": _defaults("是的", "不", "， ", " 要么 ", "， 要么 "),
}


def resolve_culture(activity: Activity, default_locale: str | None = None) -> str:
    """Pick the activity's locale, then the prompt default, falling back to English."""

    culture = (activity.locale or default_locale or ENGLISH).lower()
    if culture not in CULTURE_DEFAULTS:
        return ENGLISH
    return culture


def confirm_choices_for(culture: str) -> tuple[Choice, Choice]:
    defaults = CULTURE_DEFAULTS.get(culture, CULTURE_DEFAULTS[ENGLISH])
    return Choice(value=defaults.yes), Choice(value=defaults.no)


def choice_options_for(culture: str) -> ChoiceFactoryOptions:
    return replace(CULTURE_DEFAULTS.get(culture, CULTURE_DEFAULTS[ENGLISH]).options)
