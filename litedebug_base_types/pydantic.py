"""Base pydantic classes used to define the models exchanged with the client."""

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel
from pydantic.alias_generators import to_camel

RootModelRootType = TypeVar("RootModelRootType")


class SerializeMixin:
    """Serialization defaults that apply to every model in the package."""

    def serialize(
        self,
        mode: Literal["json", "python"],
        by_alias: bool,
        exclude_none: bool = True,
    ) -> Any:
        """
        Serialize the model, dropping `None` values unless told otherwise.

        `mode="json"` returns only JSON-serializable values, `mode="python"` may
        return arbitrary python objects.
        """
        if not hasattr(self, "model_dump"):
            raise NotImplementedError(
                f"{self.__class__.__name__} is not a pydantic model and cannot be serialized."
            )
        return self.model_dump(mode=mode, by_alias=by_alias, exclude_none=exclude_none)


class LiteDebugBaseModel(BaseModel, SerializeMixin):
    """Base model for all models in the package."""

    pass


class LiteDebugRootModel(RootModel[RootModelRootType], SerializeMixin):
    """Base root model for all root models in the package."""

    root: Any


class CamelModel(LiteDebugBaseModel):
    """
    A base model that converts field names to camel case when serializing.

    For example, `block_number` is read from and written to JSON as `blockNumber`,
    matching the casing used by the JSON-RPC API and the client genesis file.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )
