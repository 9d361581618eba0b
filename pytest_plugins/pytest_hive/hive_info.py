"""Hive instance information structures."""

from typing import List

from pydantic import BaseModel, Field

from litedebug_base_types import CamelModel, LiteDebugRootModel


class ClientInfo(BaseModel):
    """Client information, as listed in hive's client file."""

    client: str
    nametag: str | None = None
    dockerfile: str | None = None
    build_args: dict[str, str] | None = None


class ClientFile(LiteDebugRootModel[List[ClientInfo]]):
    """The clients hive was started with (the content of `--client-file`)."""

    root: List[ClientInfo] = Field(default_factory=list)


class HiveInfo(CamelModel):
    """Hive instance information, as returned by the simulator API."""

    command: List[str]
    client_file: ClientFile = Field(default_factory=ClientFile)
    commit: str
    date: str
