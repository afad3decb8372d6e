from typing import Iterable, Mapping


def resolve(template: str, substitution_maps: Iterable[Mapping[str, str]]) -> str:
    """
    Replace every occurrence of each key with its value.

    Maps are applied in the given order, so text inserted by an earlier map
    can be matched by keys of a later one. Keys that do not occur in the
    template are ignored.

    Args:
        template: String containing literal placeholder substrings
        substitution_maps: Ordered mappings of placeholder to value

    Returns:
        The substituted string
    """
    for substitutions in substitution_maps:
        for key, value in substitutions.items():
            if key:
                template = template.replace(key, value)
    return template
