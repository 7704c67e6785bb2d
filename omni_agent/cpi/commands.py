"""Command types understood by the CPI engine.

Each command is a frozen pydantic model whose ``tag`` is the key of its action
in the CPI configuration file. Field names double as template placeholders:
the ``name`` field of ``StartContainer`` fills ``{name}`` in the
``start_container`` template.
"""

from typing import Annotated, Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field


# Values end up inside shell command lines, so every user-supplied field is
# restricted to characters the CPI templates can carry through unchanged.
CONTAINER_NAME_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$"
IMAGE_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9_./:@-]*$"
PORT_PATTERN = r"^[0-9a-fA-F.:\[\]][0-9a-fA-F.:\[\]-]*(/(tcp|udp|sctp))?$"
ENV_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"
ENV_VALUE_PATTERN = r'^[^"\\\x00-\x1f\x7f]*$'

ContainerName = Annotated[str, Field(pattern=CONTAINER_NAME_PATTERN, examples=["web"])]
ImageRef = Annotated[str, Field(pattern=IMAGE_PATTERN, examples=["nginx:latest"])]
PortMapping = Annotated[str, Field(pattern=PORT_PATTERN, examples=["80:80"])]
EnvName = Annotated[str, Field(pattern=ENV_NAME_PATTERN)]
EnvValue = Annotated[str, Field(pattern=ENV_VALUE_PATTERN)]


class CpiCommandBase(BaseModel):
    """Base class for all CPI commands."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tag: ClassVar[str]


class CreateContainer(CpiCommandBase):
    tag: ClassVar[str] = "create_container"

    image: ImageRef = Field(..., description="Image to run")
    name: ContainerName = Field(..., description="Container name")
    ports: list[PortMapping] = Field(
        default_factory=list, description="Port mappings", examples=[["80:80"]]
    )
    env: dict[EnvName, EnvValue] = Field(default_factory=dict, description="Environment variables")


class DeleteContainer(CpiCommandBase):
    tag: ClassVar[str] = "delete_container"

    name: ContainerName


class StartContainer(CpiCommandBase):
    tag: ClassVar[str] = "start_container"

    name: ContainerName


class StopContainer(CpiCommandBase):
    tag: ClassVar[str] = "stop_container"

    name: ContainerName


class RestartContainer(CpiCommandBase):
    tag: ClassVar[str] = "restart_container"

    name: ContainerName


class InspectContainer(CpiCommandBase):
    tag: ClassVar[str] = "inspect_container"

    name: ContainerName


class ListContainers(CpiCommandBase):
    tag: ClassVar[str] = "list_containers"


CpiCommandType = Union[
    CreateContainer,
    DeleteContainer,
    StartContainer,
    StopContainer,
    RestartContainer,
    InspectContainer,
    ListContainers,
]

COMMAND_TYPES: dict[str, type[CpiCommandBase]] = {
    cls.tag: cls
    for cls in (
        CreateContainer,
        DeleteContainer,
        StartContainer,
        StopContainer,
        RestartContainer,
        InspectContainer,
        ListContainers,
    )
}


def command_from_tag(tag: str, **params: Any) -> CpiCommandBase:
    """Build a command from its tag and keyword parameters.

    Raises:
        KeyError: If the tag is not a known command type.
        pydantic.ValidationError: If the parameters don't fit the command.
    """
    return COMMAND_TYPES[tag](**params)


def extract_params(command: CpiCommandBase) -> dict[str, Any]:
    """Flatten a command into its placeholder map.

    Keys are exactly the declared field names of the command. ``ListContainers``
    has no fields and yields an empty map.
    """
    return command.model_dump(mode="json")
