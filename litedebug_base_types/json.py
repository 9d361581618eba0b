"""JSON conversion of the package models."""

from typing import Any, AnyStr, List

from .pydantic import LiteDebugBaseModel, LiteDebugRootModel


def to_json(
    input: (
        LiteDebugBaseModel
        | LiteDebugRootModel
        | AnyStr
        | List[LiteDebugBaseModel | LiteDebugRootModel | AnyStr]
    ),
) -> Any:
    """Convert a model (or a list of them) to its JSON data representation."""
    if isinstance(input, list):
        return [to_json(item) for item in input]
    elif isinstance(input, (LiteDebugBaseModel, LiteDebugRootModel)):
        return input.serialize(mode="json", by_alias=True)
    else:
        return str(input)
