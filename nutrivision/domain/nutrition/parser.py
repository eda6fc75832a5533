"""Parse the labelled free-text answer of the vision model.

The model is prompted to answer with one ``- <Label>: <value>`` line per
field. Nothing guarantees it complies, so every field falls back to a default
and lines that match no label are ignored.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...models.nutrition import NutritionRecord

DISH_LABEL = "- Название блюда:"
INGREDIENTS_LABEL = "- Ингредиенты:"
MASS_LABEL = "- Масса:"
CALORIES_LABEL = "- Калории:"
PROTEIN_LABEL = "- Белки:"
CARBS_LABEL = "- Углеводы:"
FAT_LABEL = "- Жиры:"
ADVICE_LABEL = "- Совет:"

_INTEGER_RUN = re.compile(r"\d+")
_MASS_UNITS = re.compile(r"(граммов|грамма|грамм|грам|г)", re.IGNORECASE)

Extractor = Callable[[str, str], Any]


def _first_integer(text: str) -> int:
    match = _INTEGER_RUN.search(text)
    return int(match.group(0)) if match else 0


def _remainder(line: str, label: str) -> str:
    return line[len(label):].strip()


def _ingredients(line: str, label: str) -> List[str]:
    return [part.strip() for part in _remainder(line, label).split(",") if part.strip()]


def _portion(line: str, label: str) -> str:
    mass = _MASS_UNITS.sub("", line[len(label):]).strip()
    match = _INTEGER_RUN.search(mass)
    return f"{match.group(0)} г" if match else ""


def _calories(line: str, label: str) -> int:
    return _first_integer(line)


def _grams(line: str, label: str) -> int:
    return _first_integer(line[len(label):])


FIELD_RULES: Tuple[Tuple[str, str, Extractor], ...] = (
    (DISH_LABEL, "description", _remainder),
    (INGREDIENTS_LABEL, "ingredients", _ingredients),
    (MASS_LABEL, "portion_size", _portion),
    (CALORIES_LABEL, "calories", _calories),
    (PROTEIN_LABEL, "protein", _grams),
    (CARBS_LABEL, "carbs", _grams),
    (FAT_LABEL, "fat", _grams),
    (ADVICE_LABEL, "advice", _remainder),
)


def _match_rule(line: str) -> Optional[Tuple[str, str, Extractor]]:
    for rule in FIELD_RULES:
        if line.startswith(rule[0]):
            return rule
    return None


def parse_ai_message(text: Any) -> NutritionRecord:
    """Convert a vision model answer into a :class:`NutritionRecord`.

    Labels are matched case-sensitively as exact line prefixes, in any
    order. When a label repeats, the last line wins. Empty or missing
    values take the record defaults, so this never raises.
    """

    if not isinstance(text, str):
        text = ""

    fields: Dict[str, Any] = {}
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        rule = _match_rule(line)
        if rule is None:
            continue
        label, field_name, extract = rule
        fields[field_name] = extract(line, label)

    return NutritionRecord(**fields)
